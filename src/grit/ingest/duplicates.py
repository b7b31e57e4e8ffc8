"""Flag import rows that match fighters already on file."""

from __future__ import annotations

from typing import List, Mapping, Optional, Protocol, Sequence

from grit.models import FieldMapping, ImportRow, ImportRowStatus


class FighterLike(Protocol):
    id: str
    first_name: str
    last_name: str


def _find_mapping(mappings: Sequence[FieldMapping], *system_fields: str) -> Optional[FieldMapping]:
    for mapping in mappings:
        if mapping.system_field in system_fields:
            return mapping
    return None


def _cell(row: Mapping[str, str], mapping: Optional[FieldMapping]) -> str:
    if mapping is None:
        return ""
    return (row.get(mapping.csv_field) or "").strip()


def detect_fighter_duplicates(
    rows: Sequence[Mapping[str, str]],
    mappings: Sequence[FieldMapping],
    existing: Sequence[FighterLike],
) -> List[ImportRow]:
    """Mark each row ``duplicate`` when its id or full name is already known.

    An id match takes precedence; otherwise first and last name are
    compared case-insensitively. Name columns may be mapped under either the
    snake_case or the camelCase field name.
    """

    first_mapping = _find_mapping(mappings, "first_name", "firstName")
    last_mapping = _find_mapping(mappings, "last_name", "lastName")
    id_mapping = _find_mapping(mappings, "id")

    by_id = {fighter.id: fighter for fighter in existing}
    by_name: dict[tuple[str, str], FighterLike] = {}
    for fighter in existing:
        by_name.setdefault((fighter.first_name.lower(), fighter.last_name.lower()), fighter)

    results: List[ImportRow] = []
    for index, row in enumerate(rows):
        csv_id = _cell(row, id_mapping)
        first = _cell(row, first_mapping).lower()
        last = _cell(row, last_mapping).lower()

        matched = by_id.get(csv_id) if csv_id else None
        if matched is None and first and last:
            matched = by_name.get((first, last))

        if matched is not None:
            results.append(
                ImportRow(
                    row_id=f"row-{index}",
                    data=dict(row),
                    status=ImportRowStatus.DUPLICATE,
                    status_message=(
                        f"Matches existing fighter: {matched.first_name} {matched.last_name}"
                    ),
                    matched_fighter_id=matched.id,
                )
            )
        else:
            results.append(
                ImportRow(row_id=f"row-{index}", data=dict(row), status=ImportRowStatus.READY)
            )
    return results
