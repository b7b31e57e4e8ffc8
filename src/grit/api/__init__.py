"""REST API for the fighter import wizard and bulk import."""

from __future__ import annotations

import enum
import json
import logging
from pathlib import Path
from typing import Any

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from pydantic import ValidationError

from grit.api.schemas import (
    BulkImportResponse,
    FallbackResponse,
    FighterListResponse,
    ImportPreviewResponse,
    ImportReportResponse,
    MappingSuggestionResponse,
    SkippedRowResponse,
    SystemFieldResponse,
)
from grit.config import FIELD_LABELS, REQUIRED_MAPPING_FIELDS, known_system_fields
from grit.ingest import (
    ImportReport,
    auto_map_fields,
    build_import_report,
    detect_fighter_duplicates,
    parse_csv_text,
    validate_mappings,
)
from grit.models import FieldMapping, ImportRowStatus
from grit.persistence import FighterStore


logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path(__file__).resolve().parent.parent / "grit.sqlite"


def _report_to_response(report: ImportReport) -> ImportReportResponse:
    return ImportReportResponse(
        total_rows=report.total_rows,
        imported_rows=report.imported_rows,
        skipped_rows=[
            SkippedRowResponse(row_index=skip.row_index, reason=skip.reason)
            for skip in report.skipped_rows
        ],
        fallbacks=[
            FallbackResponse(
                row_index=fallback.row_index,
                field=fallback.field,
                raw_value=fallback.raw_value,
                applied_value=(
                    fallback.applied_value.value
                    if isinstance(fallback.applied_value, enum.Enum)
                    else fallback.applied_value
                ),
            )
            for fallback in report.fallbacks
        ],
    )


def _system_fields() -> list[SystemFieldResponse]:
    return [
        SystemFieldResponse(
            name=name,
            label=FIELD_LABELS.get(name, name),
            required=name in REQUIRED_MAPPING_FIELDS,
        )
        for name in known_system_fields()
    ]


def _parse_mappings(mappings_str: str | None) -> list[FieldMapping]:
    if not mappings_str:
        raise HTTPException(status_code=400, detail="mappings are required")
    try:
        data = json.loads(mappings_str)
    except json.JSONDecodeError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid mappings JSON: {exc}") from exc
    if isinstance(data, dict):
        data = data.get("mappings", [])
    if not isinstance(data, list):
        raise HTTPException(status_code=400, detail="mappings must be a list")
    try:
        return [FieldMapping.model_validate(item) for item in data]
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid mapping entry: {exc}") from exc


async def _read_csv(upload: UploadFile) -> tuple[list[str], list[dict[str, str]]]:
    contents = await upload.read()
    if not contents:
        raise HTTPException(status_code=400, detail="file is empty")
    try:
        text = contents.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise HTTPException(status_code=400, detail="file must be UTF-8 encoded CSV") from exc
    headers, rows = parse_csv_text(text)
    if not headers:
        raise HTTPException(status_code=400, detail="file has no header row")
    return headers, rows


def _dump_fighter(fighter: Any) -> dict:
    return fighter.model_dump(mode="json", by_alias=True)


def create_app(db_path: Path | str | None = None) -> FastAPI:
    app = FastAPI(title="GRIT fighter import")
    store = FighterStore(db_path or DEFAULT_DB_PATH)
    app.state.fighter_store = store

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/fighters/import/mapping", response_model=MappingSuggestionResponse)
    async def suggest_mapping(file: UploadFile = File(...)) -> MappingSuggestionResponse:
        headers, rows = await _read_csv(file)
        mappings = auto_map_fields(headers)
        return MappingSuggestionResponse(
            headers=headers,
            mappings=mappings,
            validation=validate_mappings(mappings),
            system_fields=_system_fields(),
            total_rows=len(rows),
        )

    @app.post("/fighters/import/preview", response_model=ImportPreviewResponse)
    async def preview(
        file: UploadFile = File(...),
        mappings: str | None = Form(None),
    ) -> ImportPreviewResponse:
        headers, rows = await _read_csv(file)
        parsed_mappings = _parse_mappings(mappings)
        fighters, report = build_import_report(rows, parsed_mappings)
        known = store.list_fighters(limit=None)
        import_rows = detect_fighter_duplicates(rows, parsed_mappings, known)
        return ImportPreviewResponse(
            validation=validate_mappings(parsed_mappings),
            report=_report_to_response(report),
            rows=import_rows,
            fighters=[_dump_fighter(fighter) for fighter in fighters],
            duplicate_rows=sum(1 for row in import_rows if row.status == ImportRowStatus.DUPLICATE),
        )

    @app.post("/fighters/import", response_model=BulkImportResponse, status_code=201)
    async def bulk_import(
        file: UploadFile = File(...),
        mappings: str | None = Form(None),
    ) -> BulkImportResponse:
        _, rows = await _read_csv(file)
        parsed_mappings = _parse_mappings(mappings)
        validation = validate_mappings(parsed_mappings)
        if not validation.is_valid:
            raise HTTPException(
                status_code=400,
                detail={
                    "message": "required fields are not mapped",
                    "missing_fields": validation.missing_fields,
                },
            )

        fighters, report = build_import_report(rows, parsed_mappings)
        result = store.upsert_fighters(fighters)
        message = None
        if report.skipped_rows:
            message = f"Skipped {len(report.skipped_rows)} of {report.total_rows} rows"
            logger.info(message)
        return BulkImportResponse(
            created=len(result.created),
            updated=len(result.updated),
            fighter_ids=[fighter.id for fighter in fighters],
            report=_report_to_response(report),
            message=message,
        )

    @app.get("/fighters", response_model=FighterListResponse)
    async def list_fighters(limit: int = 500) -> FighterListResponse:
        fighters = store.list_fighters(limit=limit)
        return FighterListResponse(
            total=len(fighters),
            fighters=[_dump_fighter(fighter) for fighter in fighters],
        )

    @app.get("/fighters/{fighter_id}")
    async def get_fighter(fighter_id: str) -> dict:
        fighter = store.get_fighter(fighter_id)
        if fighter is None:
            raise HTTPException(status_code=404, detail="Fighter not found")
        return _dump_fighter(fighter)

    @app.delete("/fighters/{fighter_id}", status_code=204)
    async def delete_fighter(fighter_id: str) -> None:
        if not store.delete_fighter(fighter_id):
            raise HTTPException(status_code=404, detail="Fighter not found")

    return app
