"""
Configuration validation utilities.

Turns raw TOML data into a validated RestarterConfig. Every value has a
default, so an empty file yields the same configuration as the host
settings UI does on first start.
"""

import logging
from typing import Any, Dict, List, Tuple

from ..models.config import (
    CHECK_INTERVAL_RANGE,
    DEFAULT_FALLBACK_CONTROL_NAMES,
    ENUM_INTERVAL_RANGE,
    IDLE_TICKS_RANGE,
    LOG_LEVELS,
    SOURCES_PER_CHECK_RANGE,
    MonitoredTypeSpec,
    RestarterConfig,
)
from ..validation import (
    ValidationError,
    validate_boolean,
    validate_enum_choice,
    validate_name_list,
    validate_non_empty_string,
    validate_positive_integer,
)

logger = logging.getLogger(__name__)


def validate_check_interval(value: Any, field_name: str = "restarter.check_interval_ms") -> int:
    return validate_positive_integer(
        value,
        min_value=CHECK_INTERVAL_RANGE[0],
        max_value=CHECK_INTERVAL_RANGE[1],
        field_name=field_name,
    )


def validate_sources_per_check(value: Any, field_name: str = "restarter.sources_per_check") -> int:
    return validate_positive_integer(
        value,
        min_value=SOURCES_PER_CHECK_RANGE[0],
        max_value=SOURCES_PER_CHECK_RANGE[1],
        field_name=field_name,
    )


def validate_restarter_config(config_data: Dict[str, Any]) -> RestarterConfig:
    """
    Validate and create a RestarterConfig from raw configuration data.

    Args:
        config_data: Parsed TOML document

    Returns:
        Validated RestarterConfig instance

    Raises:
        ValidationError: If validation fails
    """
    restarter_settings = config_data.get("restarter", {})
    cooperative_settings = config_data.get("cooperative", {})
    attempter_settings = config_data.get("attempter", {})
    logging_settings = config_data.get("logging", {})

    check_interval_ms = validate_check_interval(
        restarter_settings.get("check_interval_ms", 500)
    )
    sources_per_check = validate_sources_per_check(
        restarter_settings.get("sources_per_check", 1)
    )
    use_cooperative_mode = validate_boolean(
        restarter_settings.get("use_cooperative_mode", False),
        field_name="restarter.use_cooperative_mode",
    )
    enum_interval_ms = validate_positive_integer(
        restarter_settings.get("enum_interval_ms", 15000),
        min_value=ENUM_INTERVAL_RANGE[0],
        max_value=ENUM_INTERVAL_RANGE[1],
        field_name="restarter.enum_interval_ms",
    )
    if enum_interval_ms < check_interval_ms:
        logger.warning(
            f"restarter.enum_interval_ms ({enum_interval_ms}) is shorter than check_interval_ms "
            f"({check_interval_ms}); the incremental scheduler will rebuild on every tick"
        )

    cooperative_idle_ticks = validate_positive_integer(
        cooperative_settings.get("idle_ticks", 30),
        min_value=IDLE_TICKS_RANGE[0],
        max_value=IDLE_TICKS_RANGE[1],
        field_name="cooperative.idle_ticks",
    )

    fallback_control_names = validate_name_list(
        attempter_settings.get("fallback_control_names", list(DEFAULT_FALLBACK_CONTROL_NAMES)),
        field_name="attempter.fallback_control_names",
    )

    log_level = validate_enum_choice(
        logging_settings.get("level", "INFO"),
        valid_choices=LOG_LEVELS,
        field_name="logging.level",
    )

    extra_source_types = validate_source_types(config_data.get("source_types", []))

    return RestarterConfig(
        check_interval_ms=check_interval_ms,
        sources_per_check=sources_per_check,
        use_cooperative_mode=use_cooperative_mode,
        enum_interval_ms=enum_interval_ms,
        cooperative_idle_ticks=cooperative_idle_ticks,
        fallback_control_names=fallback_control_names,
        extra_source_types=extra_source_types,
        log_level=log_level,
    )


def validate_source_types(source_types_data: List[Dict[str, Any]]) -> Tuple[MonitoredTypeSpec, ...]:
    """
    Validate the ``[[source_types]]`` array.

    Args:
        source_types_data: List of raw source type tables

    Returns:
        Tuple of MonitoredTypeSpec in file order

    Raises:
        ValidationError: If an entry is malformed or a type_id repeats
    """
    if not isinstance(source_types_data, list):
        raise ValidationError("source_types must be an array of tables")

    validated: List[MonitoredTypeSpec] = []
    seen_ids = set()
    for i, item in enumerate(source_types_data):
        if not isinstance(item, dict):
            raise ValidationError(f"source_types[{i}] must be a table")

        type_id = validate_non_empty_string(
            item.get("type_id"), field_name=f"source_types[{i}].type_id"
        )
        if type_id in seen_ids:
            raise ValidationError(
                f"Duplicate source type '{type_id}' in source_types",
                field_name=f"source_types[{i}].type_id",
                value=type_id,
            )
        seen_ids.add(type_id)

        display_name = validate_non_empty_string(
            item.get("display_name", type_id), field_name=f"source_types[{i}].display_name"
        )
        reactivation_property = validate_non_empty_string(
            item.get("reactivation_property", "reactivate_capture"),
            field_name=f"source_types[{i}].reactivation_property",
        )
        validated.append(
            MonitoredTypeSpec(
                type_id=type_id,
                display_name=display_name,
                reactivation_property=reactivation_property,
            )
        )

    return tuple(validated)
