from __future__ import annotations

from pydantic import BaseModel, Field

from .mapping import ImportReportResponse


class BulkImportResponse(BaseModel):
    created: int
    updated: int
    fighter_ids: list[str]
    report: ImportReportResponse
    message: str | None = None


class FighterListResponse(BaseModel):
    total: int
    fighters: list[dict] = Field(default_factory=list)
