"""Suggest column mappings from spreadsheet headers."""

from __future__ import annotations

import re
from typing import List, Optional, Sequence

from grit.config import FIGHTER_FIELD_ALIASES, FIGHTER_SYSTEM_FIELDS
from grit.models import FieldMapping, MappingStatus


def _header_token(value: str) -> str:
    return re.sub(r"[_\s-]", "", value.lower())


def _field_token(value: str) -> str:
    return value.lower().replace("_", "")


def _match_header(header: str) -> Optional[str]:
    token = _header_token(header)
    if not token:
        return None

    for system_field in FIGHTER_SYSTEM_FIELDS:
        if _field_token(system_field) == token:
            return system_field

    for system_field, aliases in FIGHTER_FIELD_ALIASES.items():
        if token in aliases:
            return system_field

    # Longest field name contained in the header; ties keep catalog order.
    candidates = [field for field in FIGHTER_SYSTEM_FIELDS if _field_token(field) in token]
    if not candidates:
        return None
    return max(candidates, key=len)


def auto_map_fields(headers: Sequence[str]) -> List[FieldMapping]:
    mappings: List[FieldMapping] = []
    for header in headers:
        system_field = _match_header(header)
        mappings.append(
            FieldMapping(
                csv_field=header,
                system_field=system_field,
                status=MappingStatus.MAPPED if system_field else MappingStatus.UNMAPPED,
            )
        )
    return mappings
