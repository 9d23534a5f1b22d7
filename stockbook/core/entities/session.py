"""Authenticated session values."""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from stockbook.core.exceptions import AuthenticationRequiredError


class User(BaseModel):
    """Dashboard user profile as returned at login."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(default="", validation_alias=AliasChoices("id", "_id"))
    name: str = ""
    email: str = ""

    @field_validator("id", "name", "email", mode="before")
    @classmethod
    def coerce_string(cls, v: Any) -> str:
        return "" if v is None else str(v)


class Session(BaseModel):
    """
    Token snapshot threaded explicitly through each backend call.

    Frozen: a request keeps the token it was dispatched with even if the
    user logs out while it is in flight.
    """

    model_config = ConfigDict(frozen=True)

    token: str | None = None
    user: User | None = None

    @classmethod
    def anonymous(cls) -> "Session":
        return cls()

    @classmethod
    def from_bearer(cls, authorization: str | None) -> "Session":
        """Build from an ``Authorization: Bearer <token>`` header value."""
        if not authorization:
            return cls()
        scheme, _, token = authorization.strip().partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            return cls()
        return cls(token=token.strip())

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def require_token(self, operation: str) -> str:
        """Return the token or fail locally, before anything is sent."""
        if not self.token:
            raise AuthenticationRequiredError(operation)
        return self.token


class AuthResponse(BaseModel):
    """Login/register response."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    token: str
    user: User = Field(default_factory=User)

    def to_session(self) -> Session:
        return Session(token=self.token, user=self.user)
