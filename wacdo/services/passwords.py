"""
Password Policy and Hashing

``validate_password`` reports the FIRST rule a candidate password breaks,
checked in this order: length, uppercase, lowercase, digit, special
character. Hashing uses bcrypt through passlib.

Usage:
    from wacdo.services.passwords import validate_password, hash_password

    validate_password(plain)          # raises PasswordPolicyError
    stored = hash_password(plain)
"""

import re

from passlib.context import CryptContext

from wacdo.core.exceptions import ValidationError

MIN_LENGTH = 8
SPECIAL_CHARACTERS = "!@#$%^&*."

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class PasswordPolicyError(ValidationError):
    """Raised with the message of the first violated rule."""


# (pattern, message) in evaluation order, after the length rule
_CHARACTER_RULES = (
    (re.compile(r"[A-Z]"), "Password Not Compliant: min 1 Maj"),
    (re.compile(r"[a-z]"), "Password Not Compliant: min 1 lower case"),
    (re.compile(r"[0-9]"), "Password Not Compliant: min 1 Number"),
    (re.compile(f"[{re.escape(SPECIAL_CHARACTERS)}]"), "Password Not Compliant: min 1 special"),
)


def validate_password(password: str) -> None:
    """
    Check a plaintext password against the strength policy.

    Args:
        password: Candidate plaintext password

    Raises:
        PasswordPolicyError: With the message of the first violated rule
    """
    if len(password) < MIN_LENGTH:
        raise PasswordPolicyError(f"password needs to be at least {MIN_LENGTH} characters long")

    for pattern, message in _CHARACTER_RULES:
        if not pattern.search(password):
            raise PasswordPolicyError(message)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)
