"""Input validation for the login and signup forms"""
import re
from dataclasses import dataclass
from typing import Optional

EMAIL_PATTERN = re.compile(r'^[\w\.\+-]+@[\w\.-]+\.\w+$')

MIN_PASSWORD_LENGTH = 6
MIN_NAME_LENGTH = 3


@dataclass(frozen=True)
class FieldError:
    """Inline error attached to one form field"""
    field: str
    message: str


def validate_email(email: str) -> bool:
    return EMAIL_PATTERN.match(email) is not None


def _check_email(email: str) -> Optional[FieldError]:
    if not email:
        return FieldError("email", "Please enter your email")
    if not validate_email(email):
        return FieldError("email", "Please enter a valid email")
    return None


def validate_login(email: str, password: str) -> Optional[FieldError]:
    """
    Check the login form. Returns the first failing field, or None when the
    input may be sent to the auth service.
    """
    error = _check_email(email)
    if error:
        return error
    if not password:
        return FieldError("password", "Please enter your password")
    if len(password) < MIN_PASSWORD_LENGTH:
        return FieldError("password", f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    return None


def validate_signup(full_name: str, email: str, password: str, confirm_password: str) -> Optional[FieldError]:
    """Same as validate_login, plus name and password confirmation checks"""
    if not full_name:
        return FieldError("full_name", "Please enter your full name")
    if len(full_name) < MIN_NAME_LENGTH:
        return FieldError("full_name", f"Name must be at least {MIN_NAME_LENGTH} characters")

    error = _check_email(email)
    if error:
        return error

    if not password:
        return FieldError("password", "Please enter a password")
    if len(password) < MIN_PASSWORD_LENGTH:
        return FieldError("password", f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    if not confirm_password:
        return FieldError("confirm_password", "Please confirm your password")
    if password != confirm_password:
        return FieldError("confirm_password", "Passwords do not match")
    return None
