"""
Response and request shapes for the Clef API.

Field names follow Python naming; wire names are kept as aliases ("id",
"clef_id", "message"). Unknown fields sent by the provider are ignored, and
the "success" flag is carried through as-is without driving any control flow.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _ClefModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class AuthorizeResult(_ClefModel):
    """Result of exchanging an OAuth code for an access token."""

    access_token: str
    success: bool = False


class UserInfo(_ClefModel):
    """Profile of the logged in Clef user."""

    provider_user_id: int = Field(alias="id")
    first_name: str = ""
    last_name: str = ""
    phone_number: str = ""
    email: str = ""

    @field_validator("first_name", "last_name", "phone_number", "email", mode="before")
    @classmethod
    def none_as_empty(cls, value):
        # The provider sends null for profile fields the user never filled in.
        return "" if value is None else value


class InfoResult(_ClefModel):
    info: Optional[UserInfo] = None
    success: bool = False


class LogoutResult(_ClefModel):
    """Result of exchanging a logout token: the Clef user whose session ended."""

    provider_user_id: int = Field(alias="clef_id")
    success: bool = False


class SwagRequest(_ClefModel):
    """Shipping details for a swag order. Credentials are added by the client."""

    name: str
    email: str
    address_line_1: str
    address_line_2: str = ""
    city: str
    zip_code: str
    state: str
    country: str

    def form_fields(self) -> dict:
        """Return the order as wire form fields."""
        return self.model_dump()


class SwagResult(_ClefModel):
    acknowledged: bool = Field(default=False, alias="message")
    success: bool = False


class ProviderErrorBody(_ClefModel):
    """Error payload sent with any non-200 status."""

    message: str = ""
    context: str = ""
    error: str = ""

    @field_validator("message", "context", "error", mode="before")
    @classmethod
    def none_as_empty(cls, value):
        return "" if value is None else value
