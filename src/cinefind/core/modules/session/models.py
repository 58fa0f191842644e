"""Session management models."""

from datetime import datetime
from typing import Self

from pydantic import BaseModel, Field

AUTH_STORAGE_KEY = "auth-storage"


class SessionUser(BaseModel):
    """Public identity of the signed-in user."""

    user_id: str = Field(..., description="Account ID")
    email: str = Field(..., description="Lowercase email")
    display_name: str = Field(..., description="Name shown in the UI")


class Session(BaseModel):
    """Client-held record of the authenticated user."""

    user: SessionUser
    token: str
    issued_at: datetime
    expires_at: datetime


class AuthResult(BaseModel):
    """Outcome of login or registration. Failures are data, never exceptions."""

    success: bool
    message: str
    session: Session | None = None

    @classmethod
    def ok(cls, session: Session, message: str = "Signed in") -> Self:
        return cls(success=True, message=message, session=session)

    @classmethod
    def failure(cls, message: str) -> Self:
        return cls(success=False, message=message)


class SessionState(BaseModel):
    user: SessionUser | None = None
    is_authenticated: bool = False
    token: str | None = None


class PersistedSession(BaseModel):
    """Envelope stored under AUTH_STORAGE_KEY."""

    state: SessionState = Field(default_factory=SessionState)
    version: int = 0
