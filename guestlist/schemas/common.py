"""Common response schemas."""
from typing import Optional

from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Plain message body used for rejections and errors."""
    message: str


class HealthResponse(BaseModel):
    status: str
    environment: str
    sheet: str
    backend: str
    rows: Optional[int] = None
