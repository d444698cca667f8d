"""
Unit tests for the session manager and credential checks.
"""

import json
from datetime import timedelta

import pytest

from ticketdesk.config import settings
from ticketdesk.core import SessionManager
from ticketdesk.models import AuthError, SessionState
from ticketdesk.utils.auth import check_login_credentials, is_valid_email
from ticketdesk.utils.clock import epoch_millis

SESSION_KEY = "ticketapp_session"


def _stored_session(storage):
    raw = storage.get(SESSION_KEY)
    return json.loads(raw) if raw is not None else None


class TestCredentialChecks:
    """Tests for the credential validation helpers."""

    @pytest.mark.parametrize("email", ["a@b.com", "first.last@example.co.uk", "x+tag@d.io"])
    def test_valid_emails(self, email):
        assert is_valid_email(email)

    @pytest.mark.parametrize("email", ["", "bad-email", "a@b", "a b@c.com", "a@@b.com", "@b.com"])
    def test_invalid_emails(self, email):
        assert not is_valid_email(email)

    def test_demo_pair_skips_email_format(self, monkeypatch):
        monkeypatch.setattr(settings, "demo_email", "demo-user")
        assert check_login_credentials("demo-user", "password") is None
        assert check_login_credentials("demo-user", "password2") == AuthError.INVALID_EMAIL

    def test_length_checked_before_email(self):
        assert check_login_credentials("bad-email", "12345") == AuthError.WEAK_PASSWORD


class TestStart:
    """Tests for restoring a persisted session."""

    def test_initial_state(self, storage, clock):
        manager = SessionManager(storage, clock=clock)
        assert manager.state == SessionState.UNINITIALIZED
        assert manager.current_session() is None

    def test_no_record_is_anonymous(self, session_manager):
        assert session_manager.state == SessionState.ANONYMOUS
        assert not session_manager.is_authenticated()

    def test_restores_valid_session(self, storage, clock, session_manager):
        session = session_manager.login("demo@test.com", "password").session
        clock.advance(hours=23)

        restored = SessionManager(storage, clock=clock)
        assert restored.start() == SessionState.AUTHENTICATED
        assert restored.current_session() == session

    def test_session_valid_at_exactly_ttl(self, storage, clock, session_manager):
        session_manager.login("demo@test.com", "password")
        clock.advance(hours=24)

        restored = SessionManager(storage, clock=clock)
        assert restored.start() == SessionState.AUTHENTICATED

    def test_expired_record_is_discarded(self, storage, clock):
        login_time = clock() - timedelta(hours=25)
        storage.set(SESSION_KEY, json.dumps({
            "email": "demo@test.com",
            "id": epoch_millis(login_time),
            "loginTime": login_time.isoformat(),
        }))

        manager = SessionManager(storage, clock=clock)
        assert manager.start() == SessionState.ANONYMOUS
        assert not manager.is_authenticated()
        assert storage.get(SESSION_KEY) is None

    def test_expiry_after_login_and_restart(self, storage, clock, session_manager):
        session_manager.login("demo@test.com", "password")
        assert session_manager.is_authenticated()

        clock.advance(hours=25)
        restarted = SessionManager(storage, clock=clock)
        restarted.start()
        assert not restarted.is_authenticated()
        assert storage.get(SESSION_KEY) is None

    @pytest.mark.parametrize("raw", [
        "{not json",
        "[]",
        '{"email": "a@b.com"}',
        '{"email": "a@b.com", "id": 1, "loginTime": "yesterday"}',
    ])
    def test_corrupt_record_is_discarded(self, storage, clock, raw):
        storage.set(SESSION_KEY, raw)
        manager = SessionManager(storage, clock=clock)
        assert manager.start() == SessionState.ANONYMOUS
        assert storage.get(SESSION_KEY) is None

    def test_accepts_browser_timestamp_format(self, storage, clock):
        storage.set(SESSION_KEY, json.dumps({
            "email": "a@b.com",
            "id": 1767268800000,
            "loginTime": "2026-01-01T11:00:00.000Z",
        }))
        manager = SessionManager(storage, clock=clock)
        assert manager.start() == SessionState.AUTHENTICATED
        assert manager.current_session().email == "a@b.com"

    def test_unreadable_storage_is_anonymous(self, flaky_storage, clock):
        flaky_storage.fail_get = True
        manager = SessionManager(flaky_storage, clock=clock)
        assert manager.start() == SessionState.ANONYMOUS


class TestLogin:
    """Tests for SessionManager.login."""

    def test_demo_login(self, session_manager, storage, clock):
        result = session_manager.login("demo@test.com", "password")

        assert result.success
        assert result.error is None
        assert result.session.email == "demo@test.com"
        assert result.session.login_time == clock()
        assert session_manager.is_authenticated()
        assert session_manager.state == SessionState.AUTHENTICATED

        stored = _stored_session(storage)
        assert set(stored) == {"email", "id", "loginTime"}
        assert stored["id"] == result.session.id

    def test_regular_login(self, session_manager):
        result = session_manager.login("agent@support.io", "hunter22")
        assert result.success
        assert session_manager.current_session().email == "agent@support.io"

    @pytest.mark.parametrize("email,password", [("", "secret1"), ("a@b.com", ""), ("", "")])
    def test_missing_credentials(self, session_manager, email, password):
        result = session_manager.login(email, password)
        assert not result.success
        assert result.error == AuthError.MISSING_CREDENTIALS
        assert result.session is None

    def test_weak_password(self, session_manager):
        assert session_manager.login("a@b.com", "12345").error == AuthError.WEAK_PASSWORD
        assert session_manager.login("demo@test.com", "pass").error == AuthError.WEAK_PASSWORD

    def test_invalid_email(self, session_manager, storage):
        result = session_manager.login("bad-email", "123456")
        assert result.error == AuthError.INVALID_EMAIL
        assert not session_manager.is_authenticated()
        assert storage.get(SESSION_KEY) is None

    def test_failed_login_keeps_existing_session(self, session_manager):
        session = session_manager.login("demo@test.com", "password").session
        session_manager.login("bad-email", "123456")
        assert session_manager.current_session() == session

    def test_new_login_replaces_session(self, session_manager, storage, clock):
        first = session_manager.login("one@test.com", "secret1").session
        clock.advance(minutes=5)
        second = session_manager.login("two@test.com", "secret2").session

        assert second.id > first.id
        assert session_manager.current_session() == second
        assert _stored_session(storage)["email"] == "two@test.com"

    def test_ids_increase_with_stalled_clock(self, session_manager):
        first = session_manager.login("one@test.com", "secret1").session
        second = session_manager.login("two@test.com", "secret2").session
        assert second.id == first.id + 1

    def test_persistence_failure_keeps_session(self, flaky_storage, clock):
        manager = SessionManager(flaky_storage, clock=clock)
        manager.start()
        flaky_storage.fail_set = True

        result = manager.login("demo@test.com", "password")
        assert result.success
        assert result.persistence_error is not None
        assert manager.is_authenticated()

    def test_expires_while_in_use(self, session_manager, storage, clock):
        session_manager.login("demo@test.com", "password")
        clock.advance(hours=24, seconds=1)

        assert session_manager.current_session() is None
        assert session_manager.state == SessionState.ANONYMOUS
        assert storage.get(SESSION_KEY) is None

    def test_custom_ttl(self, storage, clock):
        manager = SessionManager(storage, clock=clock, ttl=timedelta(minutes=30))
        manager.start()
        manager.login("demo@test.com", "password")
        clock.advance(minutes=31)
        assert not manager.is_authenticated()


class TestSignup:
    """Tests for SessionManager.signup."""

    def test_signup_logs_in(self, session_manager):
        result = session_manager.signup("new@user.com", "secret", "secret")
        assert result.success
        assert session_manager.current_session().email == "new@user.com"

    def test_password_mismatch_has_no_side_effect(self, session_manager, storage):
        result = session_manager.signup("a@b.com", "secret", "different")
        assert result.error == AuthError.PASSWORD_MISMATCH
        assert storage.get(SESSION_KEY) is None
        assert session_manager.state == SessionState.ANONYMOUS

    def test_invalid_email_checked_first(self, session_manager):
        assert session_manager.signup("bad", "a", "b").error == AuthError.INVALID_EMAIL

    def test_weak_password(self, session_manager):
        assert session_manager.signup("a@b.com", "abc", "abc").error == AuthError.WEAK_PASSWORD

    def test_demo_email_goes_through_format_check(self, session_manager):
        result = session_manager.signup("demo@test.com", "password", "password")
        assert result.success


class TestLogout:
    """Tests for SessionManager.logout."""

    def test_logout_clears_session(self, session_manager, storage):
        session_manager.login("demo@test.com", "password")
        session_manager.logout()

        assert not session_manager.is_authenticated()
        assert session_manager.state == SessionState.ANONYMOUS
        assert storage.get(SESSION_KEY) is None

    def test_logout_is_idempotent(self, session_manager):
        session_manager.logout()
        session_manager.logout()
        assert session_manager.state == SessionState.ANONYMOUS

    def test_logout_with_failing_storage(self, flaky_storage, clock):
        manager = SessionManager(flaky_storage, clock=clock)
        manager.start()
        manager.login("demo@test.com", "password")
        flaky_storage.fail_remove = True

        manager.logout()
        assert not manager.is_authenticated()
