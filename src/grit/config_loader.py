"""Persist and load column mapping profiles."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from grit.models import FieldMapping


@dataclass
class MappingProfile:
    mappings: List[FieldMapping] = field(default_factory=list)

    @classmethod
    def load(cls, path: Path) -> "MappingProfile":
        data = json.loads(path.read_text(encoding="utf-8"))
        return cls(mappings=[FieldMapping.model_validate(item) for item in data.get("mappings", [])])

    def save(self, path: Path) -> None:
        payload = {
            "mappings": [mapping.model_dump(mode="json", by_alias=True) for mapping in self.mappings],
        }
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    def merged_with(self, overrides: List[FieldMapping]) -> List[FieldMapping]:
        """Replace entries for the same CSV column with ``overrides``; keep the rest in order."""

        override_lookup = {mapping.csv_field: mapping for mapping in overrides}
        merged = [override_lookup.pop(m.csv_field, m) for m in self.mappings]
        merged.extend(override_lookup.values())
        return merged
