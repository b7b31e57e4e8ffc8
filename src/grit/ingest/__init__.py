"""Input adapters that normalize raw fighter spreadsheets."""

from .auto_mapper import auto_map_fields
from .csv_reader import load_fighter_csv, parse_csv_text
from .duplicates import detect_fighter_duplicates
from .fighters import (
    Clock,
    FieldFallback,
    ImportReport,
    SkippedRow,
    build_import_report,
    generate_fighter_id,
    get_mapped_value,
    transform_csv_data_to_fighters,
    transform_csv_to_fighter,
    validate_mappings,
)

__all__ = [
    "Clock",
    "FieldFallback",
    "ImportReport",
    "SkippedRow",
    "auto_map_fields",
    "build_import_report",
    "detect_fighter_duplicates",
    "generate_fighter_id",
    "get_mapped_value",
    "load_fighter_csv",
    "parse_csv_text",
    "transform_csv_data_to_fighters",
    "transform_csv_to_fighter",
    "validate_mappings",
]
