"""
Session Models - Defines the authenticated session record and auth outcomes.
"""

from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from .results import PersistenceError


class SessionState(str, Enum):
    """Lifecycle state of the session manager."""
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    AUTHENTICATED = "authenticated"
    ANONYMOUS = "anonymous"


class AuthError(str, Enum):
    """Credential validation failures."""
    MISSING_CREDENTIALS = "missing_credentials"
    WEAK_PASSWORD = "weak_password"
    INVALID_EMAIL = "invalid_email"
    PASSWORD_MISMATCH = "password_mismatch"


class Session(BaseModel):
    """The single active login session."""
    email: str
    id: int
    login_time: datetime = Field(alias="loginTime")

    class Config:
        populate_by_name = True

    @field_validator("login_time")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    def is_expired(self, now: datetime, ttl: timedelta) -> bool:
        """A session stays valid while now - login_time <= ttl."""
        return now - self.login_time > ttl


class AuthResult(BaseModel):
    """Outcome of login/signup."""
    success: bool
    session: Optional[Session] = None
    error: Optional[AuthError] = None
    persistence_error: Optional[PersistenceError] = None

    @classmethod
    def ok(cls, session: Session, persistence_error: Optional[PersistenceError] = None) -> "AuthResult":
        return cls(success=True, session=session, persistence_error=persistence_error)

    @classmethod
    def fail(cls, error: AuthError) -> "AuthResult":
        return cls(success=False, error=error)
