"""Pydantic models for API I/O."""

from .mapping import (
    FallbackResponse,
    ImportPreviewResponse,
    ImportReportResponse,
    MappingSuggestionResponse,
    SkippedRowResponse,
    SystemFieldResponse,
)
from .fighter import BulkImportResponse, FighterListResponse

__all__ = [
    "BulkImportResponse",
    "FallbackResponse",
    "FighterListResponse",
    "ImportPreviewResponse",
    "ImportReportResponse",
    "MappingSuggestionResponse",
    "SkippedRowResponse",
    "SystemFieldResponse",
]
