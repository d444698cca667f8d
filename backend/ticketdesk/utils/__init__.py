"""Utils module."""

from .clock import Clock, utc_now, epoch_millis, next_id
from .auth import is_valid_email, is_demo_login, check_login_credentials, check_signup_credentials

__all__ = [
    'Clock', 'utc_now', 'epoch_millis', 'next_id',
    'is_valid_email', 'is_demo_login', 'check_login_credentials', 'check_signup_credentials'
]
