"""
Logged-in user record as returned by the login and sign-up endpoints.
"""

from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class AuthUser(BaseModel):
    """User profile plus the token pair issued by the API."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: Optional[Union[int, str]] = None
    name: Optional[str] = None
    email: Optional[str] = None
    avatar_url: Optional[str] = None
    access_token: Optional[str] = Field(None, alias="accessToken")
    refresh_token: Optional[str] = Field(None, alias="refreshToken")

    def to_storage(self) -> Dict[str, Any]:
        """Serialize with the API's field names, as the session stores keep it."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
