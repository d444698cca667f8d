"""
Session Manager - Owns the single authenticated session.
Handles credential checks, session persistence, expiry, and logout.
"""

import logging
from datetime import timedelta
from typing import Optional

import pydantic

from ..config import settings
from ..models import AuthResult, PersistenceError, Session, SessionState
from ..storage import StorageError, StorageInterface
from ..utils.auth import check_login_credentials, check_signup_credentials
from ..utils.clock import Clock, next_id, utc_now

logger = logging.getLogger(__name__)


class SessionManager:
    """
    Manages the login session persisted under a single storage key.

    State moves UNINITIALIZED -> LOADING -> AUTHENTICATED | ANONYMOUS on start(),
    and between AUTHENTICATED and ANONYMOUS on login, logout, and expiry.
    """

    def __init__(
        self,
        storage: StorageInterface,
        clock: Clock = utc_now,
        storage_key: Optional[str] = None,
        ttl: Optional[timedelta] = None,
        password_min_length: Optional[int] = None
    ):
        """
        Initialize the session manager.

        Args:
            storage: Storage implementation holding the session record
            clock: Time source returning aware UTC datetimes
            storage_key: Record key (defaults to settings.session_storage_key)
            ttl: Session lifetime (defaults to settings.session_ttl_hours)
            password_min_length: Minimum password length (defaults to settings)
        """
        self.storage = storage
        self.clock = clock
        self.storage_key = storage_key or settings.session_storage_key
        self.ttl = ttl if ttl is not None else timedelta(hours=settings.session_ttl_hours)
        self.password_min_length = (
            password_min_length if password_min_length is not None else settings.password_min_length
        )
        self.state = SessionState.UNINITIALIZED
        self._session: Optional[Session] = None
        self._last_id = 0

    def start(self) -> SessionState:
        """
        Restore a persisted session, discarding it if unreadable or expired.

        Returns:
            SessionState: AUTHENTICATED or ANONYMOUS
        """
        self.state = SessionState.LOADING
        self._session = None

        try:
            raw = self.storage.get(self.storage_key)
        except StorageError as e:
            logger.warning(f"Could not read session record: {e}")
            raw = None

        if raw is None:
            self.state = SessionState.ANONYMOUS
            return self.state

        try:
            session = Session.model_validate_json(raw)
        except pydantic.ValidationError as e:
            logger.warning(f"Invalid session data, discarding: {e.error_count()} error(s)")
            self._clear_record()
            self.state = SessionState.ANONYMOUS
            return self.state

        if session.is_expired(self.clock(), self.ttl):
            logger.info("Session expired")
            self._clear_record()
            self.state = SessionState.ANONYMOUS
            return self.state

        self._session = session
        self._last_id = max(self._last_id, session.id)
        self.state = SessionState.AUTHENTICATED
        logger.info(f"Session restored for {session.email}")
        return self.state

    def login(self, email: str, password: str) -> AuthResult:
        """
        Validate credentials and open a new session.

        Args:
            email: Email address
            password: Plain text password

        Returns:
            AuthResult: The new session, or the failing AuthError
        """
        error = check_login_credentials(email, password, self.password_min_length)
        if error is not None:
            logger.info(f"Login rejected: {error.value}")
            return AuthResult.fail(error)

        now = self.clock()
        session = Session(email=email, id=next_id(now, self._last_id), login_time=now)
        self._last_id = session.id

        persistence_error = None
        try:
            self.storage.set(self.storage_key, session.model_dump_json(by_alias=True))
        except StorageError as e:
            logger.error(f"Failed to persist session: {e}")
            persistence_error = PersistenceError(message=str(e))

        self._session = session
        self.state = SessionState.AUTHENTICATED
        logger.info(f"Logged in {email}")
        return AuthResult.ok(session, persistence_error)

    def signup(self, email: str, password: str, confirm_password: str) -> AuthResult:
        """
        Validate signup fields, then log in with the same credentials.
        No credential record is stored.

        Returns:
            AuthResult: The new session, or the failing AuthError
        """
        error = check_signup_credentials(email, password, confirm_password, self.password_min_length)
        if error is not None:
            logger.info(f"Signup rejected: {error.value}")
            return AuthResult.fail(error)

        return self.login(email, password)

    def logout(self) -> None:
        """Clear the session. Safe to call when already logged out."""
        if self._session is not None:
            logger.info(f"Logged out {self._session.email}")
        self._clear_record()
        self._session = None
        self.state = SessionState.ANONYMOUS

    def current_session(self) -> Optional[Session]:
        """
        Get the active session, checking expiry against the clock on every call.

        Returns:
            Optional[Session]: The session, or None if anonymous or expired
        """
        if self._session is None:
            return None

        if self._session.is_expired(self.clock(), self.ttl):
            logger.info(f"Session expired for {self._session.email}")
            self._clear_record()
            self._session = None
            self.state = SessionState.ANONYMOUS
            return None

        return self._session

    def is_authenticated(self) -> bool:
        """Check whether a non-expired session is active."""
        return self.current_session() is not None

    def _clear_record(self) -> None:
        try:
            self.storage.remove(self.storage_key)
        except StorageError as e:
            logger.warning(f"Failed to clear session record: {e}")
