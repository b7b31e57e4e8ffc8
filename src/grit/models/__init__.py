"""Domain models for fighters and column mappings."""

from .fighter import (
    Fighter,
    FighterRecord,
    Gender,
    Organization,
    PerformanceMetrics,
    PhysicalStats,
    Stance,
    WeightClass,
)
from .mapping import (
    FieldMapping,
    ImportRow,
    ImportRowStatus,
    MappingStatus,
    MappingValidation,
)

__all__ = [
    "Fighter",
    "FighterRecord",
    "Gender",
    "Organization",
    "PerformanceMetrics",
    "PhysicalStats",
    "Stance",
    "WeightClass",
    "FieldMapping",
    "ImportRow",
    "ImportRowStatus",
    "MappingStatus",
    "MappingValidation",
]
