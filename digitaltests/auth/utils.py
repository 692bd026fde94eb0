import re
from typing import Optional

from passlib.hash import bcrypt

from digitaltests.common.i18n import t
from digitaltests.config import config


EMAIL_REGEX = re.compile(r"^[\w.+-]+@[\w-]+(\.[\w-]+)*\.[A-Za-z]{2,}$")
USERNAME_REGEX = re.compile(r"^[a-zA-Z0-9_]+$")


def _truncate_password(plain_password: str) -> str:
    """Helper to consistently truncate password to its first 72 UTF-8 bytes."""
    # Encode to bytes, take the first 72 bytes, and decode back to a string,
    # ignoring any incomplete multi-byte characters at the truncation point.
    password_bytes = plain_password.encode('utf-8')[:72]
    return password_bytes.decode('utf-8', errors='ignore')


def hash_password(plain_password: str) -> str:
    """
    Hash password using bcrypt. It is truncated to the first 72 bytes
    of its UTF-8 encoding before hashing.
    """
    truncated = _truncate_password(plain_password)
    return bcrypt.using(rounds=config.BCRYPT_ROUNDS).hash(truncated)


def verify_password(plain_password: str, password_hash: str) -> bool:
    """Verify a password against a hash, using the same truncation as hash_password."""
    truncated = _truncate_password(plain_password)
    return bcrypt.verify(truncated, password_hash)


def normalize_email(email) -> Optional[str]:
    """Trim and lowercase an email; blank values become None."""
    if not isinstance(email, str):
        return None
    email = email.strip().lower()
    return email or None


def is_valid_email(email: str) -> bool:
    return bool(email and EMAIL_REGEX.match(email))


def validate_registration(data: dict) -> Optional[str]:
    """
    Server-side validation of the registration payload.
    Returns the first failing message, or None when the payload is valid.
    """
    name = (data.get("name") or "").strip() if isinstance(data.get("name"), str) else ""
    username = data.get("username")
    username = username.strip() if isinstance(username, str) else ""
    email = data.get("email")
    email = email.strip() if isinstance(email, str) else ""
    password = data.get("password")
    password = password.strip() if isinstance(password, str) else ""

    if not name:
        return t("Validation.RegisterValidation.name_missing")
    if not 2 <= len(name) <= 50:
        return t("Validation.RegisterValidation.name_length")

    if username:
        if not 3 <= len(username) <= 30:
            return t("Validation.RegisterValidation.username_length")
        if not USERNAME_REGEX.match(username):
            return t("Validation.RegisterValidation.username_format")

    if email and not is_valid_email(email.lower()):
        return t("Validation.RegisterValidation.invalid_email")

    if not password:
        return t("Validation.RegisterValidation.password_missing")
    if not config.MIN_PASSWORD_LENGTH <= len(password) <= config.MAX_PASSWORD_LENGTH:
        return t("Validation.RegisterValidation.password_length")

    if not email and not username:
        return t("Validation.RegisterValidation.email_or_username_required")

    return None


def validate_password(password) -> bool:
    """Password strength check used on reset: only a minimum length."""
    return isinstance(password, str) and len(password) >= config.MIN_PASSWORD_LENGTH
