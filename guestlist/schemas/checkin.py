"""Check-in schemas."""
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from guestlist.core.sanitization import sanitize_identifier


class CheckinRequest(BaseModel):
    # Missing or blank ids are accepted here and rejected by the endpoint
    # with the service's own 400 message.
    id: Optional[Union[str, int]] = None

    @field_validator('id', mode='before')
    @classmethod
    def sanitize_id_field(cls, v):
        """Normalize the identifier to a trimmed string."""
        if v is None:
            return v
        return sanitize_identifier(v)


class CheckinResponse(BaseModel):
    """Profile fields returned after a successful check-in."""
    model_config = ConfigDict(populate_by_name=True)

    email: str
    username: str
    team_name: str = Field(alias="teamName")
    tshirt: str = Field(alias="tShirt")
