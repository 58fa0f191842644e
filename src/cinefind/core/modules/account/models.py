from datetime import datetime
from uuid import uuid4

from pydantic import BaseModel, Field

from cinefind.utils import now


class Account(BaseModel):
    """Registered account. Keyed by lowercase email."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    email: str
    display_name: str
    password_hash: str  # bcrypt hash
    created_at: datetime = Field(default_factory=now)
