"""Configuration helpers for fighter import fields."""

from .fields import (
    FIELD_LABELS,
    FIGHTER_FIELD_ALIASES,
    FIGHTER_SYSTEM_FIELDS,
    REQUIRED_MAPPING_FIELDS,
    is_known_system_field,
    known_system_fields,
)

__all__ = [
    "FIELD_LABELS",
    "FIGHTER_FIELD_ALIASES",
    "FIGHTER_SYSTEM_FIELDS",
    "REQUIRED_MAPPING_FIELDS",
    "is_known_system_field",
    "known_system_fields",
]
