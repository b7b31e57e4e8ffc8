from __future__ import annotations

from pydantic import BaseModel, Field

from grit.models import FieldMapping, ImportRow, MappingValidation


class SystemFieldResponse(BaseModel):
    name: str
    label: str
    required: bool = False


class MappingSuggestionResponse(BaseModel):
    headers: list[str]
    mappings: list[FieldMapping]
    validation: MappingValidation
    system_fields: list[SystemFieldResponse] = Field(default_factory=list)
    total_rows: int = 0


class SkippedRowResponse(BaseModel):
    row_index: int
    reason: str


class FallbackResponse(BaseModel):
    row_index: int
    field: str
    raw_value: str
    applied_value: str | int | float | bool


class ImportReportResponse(BaseModel):
    total_rows: int
    imported_rows: int
    skipped_rows: list[SkippedRowResponse] = Field(default_factory=list)
    fallbacks: list[FallbackResponse] = Field(default_factory=list)


class ImportPreviewResponse(BaseModel):
    validation: MappingValidation
    report: ImportReportResponse
    rows: list[ImportRow]
    fighters: list[dict]
    duplicate_rows: int = 0
