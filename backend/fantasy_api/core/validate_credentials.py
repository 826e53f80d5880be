"""Credential Validation — password complexity and email format rules.

Invariants:
    - Password complexity is shared by user passwords and league passwords
    - Validators are PURE: return a list of messages, empty when valid
    - Messages never echo the submitted password

Design Decisions:
    - Lists of messages over first-failure exceptions: the client shows every rule at once
"""

import re

PASSWORD_MIN_LENGTH: int = 8
PASSWORD_MAX_LENGTH: int = 12
EMAIL_MAX_LENGTH: int = 50

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def validate_password_complexity(password: str, label: str = "Password") -> list[str]:
    """8–12 alphanumeric characters with at least one upper, one lower and one digit."""
    if not password:
        return [f"{label} is required."]

    errors = []
    if not PASSWORD_MIN_LENGTH <= len(password) <= PASSWORD_MAX_LENGTH:
        errors.append(
            f"{label} must be between {PASSWORD_MIN_LENGTH} and "
            f"{PASSWORD_MAX_LENGTH} characters.",
        )
    if not password.isascii() or not password.isalnum():
        errors.append(f"{label} must contain only letters and digits.")
    if not any(c.isupper() for c in password):
        errors.append(f"{label} must contain at least one uppercase letter.")
    if not any(c.islower() for c in password):
        errors.append(f"{label} must contain at least one lowercase letter.")
    if not any(c.isdigit() for c in password):
        errors.append(f"{label} must contain at least one digit.")
    return errors


def validate_password_pair(password: str, confirmation: str) -> list[str]:
    """Complexity plus confirmation match."""
    errors = validate_password_complexity(password)
    if password != confirmation:
        errors.append("Password and confirmation do not match.")
    return errors


def validate_email_format(email: str) -> list[str]:
    if not email or not email.strip():
        return ["Email is required."]
    errors = []
    if len(email) > EMAIL_MAX_LENGTH:
        errors.append(f"Email must be at most {EMAIL_MAX_LENGTH} characters.")
    if not _EMAIL_RE.match(email.strip()):
        errors.append("Email format is invalid.")
    return errors


def normalize_email(email: str) -> str:
    return email.strip().lower()
