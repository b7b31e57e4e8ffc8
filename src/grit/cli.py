"""Command-line interface for converting fighter spreadsheets to JSON."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from grit.config import is_known_system_field
from grit.config_loader import MappingProfile
from grit.ingest import auto_map_fields, build_import_report, load_fighter_csv, validate_mappings
from grit.models import FieldMapping, MappingStatus


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Convert a fighter CSV into GRIT fighter records")
    parser.add_argument("csv", type=Path, help="Path to fighters CSV")
    parser.add_argument(
        "--column",
        action="append",
        default=[],
        help="Map a CSV header to a system field (e.g., 'First Name=first_name')",
    )
    parser.add_argument(
        "--ignore",
        action="append",
        default=[],
        help="CSV header to leave out of the import",
    )
    parser.add_argument(
        "--no-auto-map",
        action="store_true",
        help="Only use --column entries and the loaded profile",
    )
    parser.add_argument("--load-profile", type=Path, help="Load column mapping JSON", default=None)
    parser.add_argument("--save-profile", type=Path, help="Save column mapping JSON", default=None)
    parser.add_argument("--output", type=Path, default=Path("fighters.json"), help="Output JSON path")
    parser.add_argument(
        "--report",
        type=Path,
        default=None,
        help="Optional path to write import summary JSON",
    )
    parser.add_argument(
        "--allow-incomplete",
        action="store_true",
        help="Transform even when required fields are not mapped",
    )
    parser.add_argument("--verbose", action="store_true", help="Log field fallbacks and row skips")
    return parser.parse_args(argv)


def _parse_columns(entries: list[str]) -> list[FieldMapping]:
    mappings: list[FieldMapping] = []
    for entry in entries:
        if "=" not in entry:
            raise SystemExit(f"Invalid column entry '{entry}', expected header=field")
        header, system_field = entry.rsplit("=", 1)
        system_field = system_field.strip()
        if not is_known_system_field(system_field):
            raise SystemExit(f"Unknown system field '{system_field}' in '{entry}'")
        mappings.append(
            FieldMapping(csv_field=header.strip(), system_field=system_field, status=MappingStatus.MAPPED)
        )
    return mappings


def _preview(values: list[str], limit: int = 5) -> str:
    preview = ", ".join(values[:limit])
    more = len(values) - limit
    suffix = f", +{more} more" if more > 0 else ""
    return f"{preview}{suffix}"


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    headers, rows = load_fighter_csv(args.csv)

    # Precedence: auto-mapped headers < loaded profile < --column entries.
    mappings = [] if args.no_auto_map else auto_map_fields(headers)
    if args.load_profile:
        mappings = MappingProfile(mappings).merged_with(MappingProfile.load(args.load_profile).mappings)
    mappings = MappingProfile(mappings).merged_with(_parse_columns(args.column))
    ignored = set(args.ignore)
    mappings = [
        FieldMapping(csv_field=m.csv_field, status=MappingStatus.IGNORED) if m.csv_field in ignored else m
        for m in mappings
    ]

    if args.save_profile:
        MappingProfile(mappings).save(args.save_profile)
        print(f"Saved mapping profile to {args.save_profile}")

    validation = validate_mappings(mappings)
    if not validation.is_valid:
        message = f"Required fields not mapped: {', '.join(validation.missing_fields)}"
        if not args.allow_incomplete:
            raise SystemExit(message)
        print(f"Warning: {message}")

    fighters, report = build_import_report(rows, mappings)
    payload = [fighter.model_dump(mode="json", by_alias=True) for fighter in fighters]
    args.output.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    print(f"Converted {report.imported_rows}/{report.total_rows} rows to {args.output}")

    if report.skipped_rows:
        print(f"Skipped rows: {_preview([f'{s.row_index} ({s.reason})' for s in report.skipped_rows])}")
    if report.fallbacks:
        print(f"Defaulted values: {_preview([f'{f.row_index}:{f.field}={f.raw_value!r}' for f in report.fallbacks])}")

    if args.report:
        report_payload = {
            "total_rows": report.total_rows,
            "imported_rows": report.imported_rows,
            "skipped_rows": [
                {"row_index": skip.row_index, "reason": skip.reason} for skip in report.skipped_rows
            ],
            "fallbacks": [
                {
                    "row_index": fallback.row_index,
                    "field": fallback.field,
                    "raw_value": fallback.raw_value,
                    "applied_value": getattr(fallback.applied_value, "value", fallback.applied_value),
                }
                for fallback in report.fallbacks
            ],
            "mappings": [m.model_dump(mode="json", by_alias=True) for m in mappings],
        }
        args.report.write_text(json.dumps(report_payload, indent=2), encoding="utf-8")
        print(f"Wrote import report to {args.report}")


if __name__ == "__main__":
    main()
