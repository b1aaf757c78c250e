"""
Validation functions for configuration values.

Each validator returns the normalized value or raises ValidationError with
the offending field name in the message.
"""

from typing import Any, List, Optional, Sequence

from .exceptions import ValidationError


def validate_positive_integer(
    value: Any,
    min_value: int = 1,
    max_value: Optional[int] = None,
    field_name: str = "value"
) -> int:
    """
    Validate that a value is an integer within bounds.

    Args:
        value: Value to validate
        min_value: Minimum allowed value (inclusive)
        max_value: Maximum allowed value (inclusive), None for no limit
        field_name: Name of the field being validated

    Returns:
        Validated integer value

    Raises:
        ValidationError: If validation fails
    """
    # bool is an int subclass; a stray true/false in TOML is a typo, not a number
    if isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be a valid integer, got {value}",
            field_name=field_name,
            value=value
        )
    try:
        int_value = int(value)
    except (ValueError, TypeError):
        raise ValidationError(
            f"{field_name} must be a valid integer, got {value}",
            field_name=field_name,
            value=value
        )
    if int_value < min_value:
        raise ValidationError(
            f"{field_name} must be >= {min_value}, got {int_value}",
            field_name=field_name,
            value=value
        )
    if max_value is not None and int_value > max_value:
        raise ValidationError(
            f"{field_name} must be <= {max_value}, got {int_value}",
            field_name=field_name,
            value=value
        )
    return int_value


def validate_boolean(value: Any, field_name: str = "value") -> bool:
    """Validate that a value is a real boolean."""
    if not isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be a boolean, got {value!r}",
            field_name=field_name,
            value=value
        )
    return value


def validate_enum_choice(
    value: Any,
    valid_choices: Sequence[str],
    field_name: str = "value",
    case_sensitive: bool = False
) -> str:
    """
    Validate that a value is one of the allowed choices.

    Args:
        value: Value to validate
        valid_choices: List of valid choices
        field_name: Name of the field being validated
        case_sensitive: Whether comparison should be case sensitive

    Returns:
        The matching choice as spelled in valid_choices

    Raises:
        ValidationError: If value is not in valid choices
    """
    if not isinstance(value, str):
        raise ValidationError(
            f"{field_name} must be a string, got {type(value).__name__}",
            field_name=field_name,
            value=value
        )

    for choice in valid_choices:
        if value == choice or (not case_sensitive and value.lower() == choice.lower()):
            return choice

    raise ValidationError(
        f"{field_name} must be one of {list(valid_choices)}, got '{value}'",
        field_name=field_name,
        value=value
    )


def validate_name_list(
    value: Any,
    field_name: str = "value",
    allow_empty: bool = True
) -> List[str]:
    """
    Validate a list of identifier-like names, dropping duplicates.

    Order is preserved; the first occurrence of a name wins.
    """
    if not isinstance(value, (list, tuple)):
        raise ValidationError(
            f"{field_name} must be a list of strings",
            field_name=field_name,
            value=value
        )

    names: List[str] = []
    for i, item in enumerate(value):
        if not isinstance(item, str) or not item.strip():
            raise ValidationError(
                f"{field_name}[{i}] must be a non-empty string, got {item!r}",
                field_name=field_name,
                value=value
            )
        name = item.strip()
        if name not in names:
            names.append(name)

    if not names and not allow_empty:
        raise ValidationError(
            f"{field_name} must not be empty",
            field_name=field_name,
            value=value
        )
    return names


def validate_non_empty_string(value: Any, field_name: str = "value") -> str:
    """Validate that a value is a string with visible content."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(
            f"{field_name} must be a non-empty string",
            field_name=field_name,
            value=value
        )
    return value.strip()
