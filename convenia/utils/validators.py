"""
Validation utilities
"""

import re
from typing import Any, Iterable, Optional
from convenia.utils.exceptions import ValidationError


def validate_email(email: str) -> bool:
    """
    Validate email format

    Args:
        email: Email to validate

    Returns:
        True if valid email
    """
    if not email or not isinstance(email, str):
        return False

    pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
    return bool(re.match(pattern, email.strip()))


def validate_password(password: str) -> bool:
    """
    Validate password strength

    Args:
        password: Password to validate

    Returns:
        True if valid password
    """
    if not password or not isinstance(password, str):
        return False

    # At least 6 characters
    return len(password) >= 6


def validate_required(value: Any, field_name: str) -> None:
    """
    Validate required field

    Args:
        value: Value to validate
        field_name: Name of the field for error message

    Raises:
        ValidationError: If value is empty, None or not a string
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{field_name} is required")
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")


def validate_required_fields(data: dict, fields: Iterable[str]) -> None:
    """Raise one ValidationError naming every missing field"""
    missing = [name for name in fields
               if data.get(name) is None or (isinstance(data.get(name), str) and not data.get(name).strip())]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    malformed = [name for name in fields if not isinstance(data.get(name), str)]
    if malformed:
        raise ValidationError(f"Fields must be strings: {', '.join(malformed)}")


def validate_choice(value: str, choices: Iterable[str], field_name: str) -> None:
    """
    Validate that value is one of the allowed choices

    Raises:
        ValidationError: If value is not an allowed choice
    """
    choices = list(choices)
    if value not in choices:
        raise ValidationError(f"Invalid {field_name}. Must be one of: {', '.join(choices)}")


def validate_string_length(value: str, min_length: int = 1, max_length: Optional[int] = None,
                           field_name: str = "Field") -> None:
    """
    Validate string length

    Args:
        value: String to validate
        min_length: Minimum length
        max_length: Maximum length
        field_name: Name of the field for error message

    Raises:
        ValidationError: If length is invalid
    """
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")

    if len(value) < min_length:
        raise ValidationError(f"{field_name} must be at least {min_length} characters")

    if max_length and len(value) > max_length:
        raise ValidationError(f"{field_name} must be no more than {max_length} characters")
