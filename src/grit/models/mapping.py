"""Column mapping models shared by the import wizard, CLI and pipeline."""

from __future__ import annotations

import enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from pydantic.config import ConfigDict


class MappingStatus(str, enum.Enum):
    MAPPED = "mapped"
    UNMAPPED = "unmapped"
    IGNORED = "ignored"


class FieldMapping(BaseModel):
    """One CSV column and the system field it feeds, if any."""

    csv_field: str
    system_field: Optional[str] = None
    status: MappingStatus = MappingStatus.UNMAPPED

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class MappingValidation(BaseModel):
    is_valid: bool
    missing_fields: List[str] = Field(default_factory=list)


class ImportRowStatus(str, enum.Enum):
    READY = "ready"
    DUPLICATE = "duplicate"


class ImportRow(BaseModel):
    """A raw row annotated with its duplicate-check outcome."""

    row_id: str
    data: Dict[str, str]
    status: ImportRowStatus
    status_message: Optional[str] = None
    matched_fighter_id: Optional[str] = None
