"""
Source type classification.

Decides whether a host source type is one the restarter watches and which
button property reactivates it. The table is small, so lookups are a plain
linear scan with exact string matching.
"""

import logging
from typing import Iterable, Optional, Sequence, Tuple

from ..models.config import MonitoredTypeSpec

logger = logging.getLogger(__name__)

# Source types monitored out of the box. macOS ScreenCaptureKit sources
# expose a "reactivate_capture" button once the capture stream stalls.
BUILTIN_SOURCE_TYPES: Tuple[MonitoredTypeSpec, ...] = (
    MonitoredTypeSpec(
        type_id="screen_capture",
        display_name="screen capture",
        reactivation_property="reactivate_capture",
    ),
    MonitoredTypeSpec(
        type_id="sck_audio_capture",
        display_name="audio capture",
        reactivation_property="reactivate_capture",
    ),
)


def get_source_type(
    type_id: Optional[str],
    source_types: Optional[Sequence[MonitoredTypeSpec]] = None,
) -> Optional[MonitoredTypeSpec]:
    """Return the descriptor registered for ``type_id``, or None.

    Args:
        type_id: Unversioned host type identifier of a source.
        source_types: Table to search. Defaults to BUILTIN_SOURCE_TYPES.

    Returns:
        The matching MonitoredTypeSpec, or None when the type is not
        monitored (including empty or missing ids).

    Examples:
        >>> get_source_type("screen_capture").display_name
        'screen capture'
        >>> get_source_type("image_source") is None
        True
    """
    if not type_id:
        return None

    table = BUILTIN_SOURCE_TYPES if source_types is None else source_types
    for source_type in table:
        if source_type.type_id == type_id:
            return source_type
    return None


def build_source_types(
    extra: Iterable[MonitoredTypeSpec] = (),
) -> Tuple[MonitoredTypeSpec, ...]:
    """
    Merge configured source types into the built-in table.

    A configured type with the same ``type_id`` as a built-in one replaces
    it in place; new types are appended in configuration order. The
    built-in table itself is never modified.
    """
    merged = list(BUILTIN_SOURCE_TYPES)
    for source_type in extra:
        for i, existing in enumerate(merged):
            if existing.type_id == source_type.type_id:
                logger.debug(f"Overriding built-in source type '{source_type.type_id}'")
                merged[i] = source_type
                break
        else:
            merged.append(source_type)
    return tuple(merged)
