"""Field Rules: syntactic checks shared by transport and domain validation.

Invariants:
    - Pure predicates, no exceptions escape
    - Email rule is syntactic only (no DNS, no deliverability)

Design Decisions:
    - email-validator (the library behind pydantic EmailStr) over a local regex:
      rejects leading/doubled dots and dotless domains such as "localhost"
"""

from email_validator import EmailNotValidError, validate_email

MIN_PASSWORD_LENGTH = 5


def is_valid_email(value: str) -> bool:
    """True when value is shaped like an email address."""
    if not value:
        return False
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def is_valid_password(value: str) -> bool:
    return len(value) >= MIN_PASSWORD_LENGTH
