"""Pydantic schemas for request/response validation."""
from guestlist.schemas.checkin import CheckinRequest, CheckinResponse
from guestlist.schemas.common import HealthResponse, MessageResponse

__all__ = [
    "CheckinRequest",
    "CheckinResponse",
    "HealthResponse",
    "MessageResponse",
]
