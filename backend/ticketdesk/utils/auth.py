"""
Authentication utilities - credential shape checks for the demo login flow.
No password hashing: sessions are demo-grade and no credential records are kept.
"""

import re
from typing import Optional

from ..config import settings
from ..models import AuthError

# local@domain.tld with no whitespace and a single @
EMAIL_REGEX = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_valid_email(email: str) -> bool:
    """Check that an email has the local@domain.tld shape."""
    return bool(email) and EMAIL_REGEX.match(email) is not None


def is_demo_login(email: str, password: str) -> bool:
    """Check for the privileged demo credential pair."""
    return email == settings.demo_email and password == settings.demo_password


def check_login_credentials(
    email: str,
    password: str,
    min_length: Optional[int] = None
) -> Optional[AuthError]:
    """
    Validate login credentials.

    Args:
        email: Email address
        password: Plain text password
        min_length: Minimum password length (defaults to settings)

    Returns:
        Optional[AuthError]: First failing rule, or None if the credentials are acceptable
    """
    if min_length is None:
        min_length = settings.password_min_length

    if not email or not password:
        return AuthError.MISSING_CREDENTIALS

    if len(password) < min_length:
        return AuthError.WEAK_PASSWORD

    # Demo pair skips the email format check
    if is_demo_login(email, password):
        return None

    if not is_valid_email(email):
        return AuthError.INVALID_EMAIL

    return None


def check_signup_credentials(
    email: str,
    password: str,
    confirm_password: str,
    min_length: Optional[int] = None
) -> Optional[AuthError]:
    """
    Validate signup credentials before they are handed to login.

    Returns:
        Optional[AuthError]: First failing rule, or None if signup may proceed
    """
    if min_length is None:
        min_length = settings.password_min_length

    if not is_valid_email(email):
        return AuthError.INVALID_EMAIL

    if password != confirm_password:
        return AuthError.PASSWORD_MISMATCH

    if len(password or "") < min_length:
        return AuthError.WEAK_PASSWORD

    return None
