"""Turn mapped CSV rows into canonical fighter records."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Mapping, Optional, Sequence, Set, Tuple

from grit.config import REQUIRED_MAPPING_FIELDS
from grit.models import (
    FieldMapping,
    Fighter,
    FighterRecord,
    MappingStatus,
    MappingValidation,
    PerformanceMetrics,
    PhysicalStats,
)

from .normalizers import (
    NormalizationResult,
    normalize_gender,
    normalize_organization,
    normalize_stance,
    normalize_weight_class,
    parse_boolean,
    parse_int,
    parse_number,
)


logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

_BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"

# (attribute, system field) pairs; physical stats mix integer and free-text columns.
_PHYSICAL_INT_FIELDS = (
    ("age", "age"),
    ("height_inches", "height_inches"),
    ("reach_inches", "reach_inches"),
    ("leg_reach_inches", "leg_reach_inches"),
    ("weight", "weight"),
)
_PHYSICAL_TEXT_FIELDS = (
    ("height", "height"),
    ("reach", "reach"),
    ("leg_reach", "leg_reach"),
)
_RECORD_FIELDS = (
    ("wins", "wins"),
    ("losses", "losses"),
    ("draws", "draws"),
    ("no_contests", "no_contests"),
)
_PERFORMANCE_INT_FIELDS = (
    ("ko_wins", "ko_wins"),
    ("tko_wins", "tko_wins"),
    ("submission_wins", "submission_wins"),
    ("decision_wins", "decision_wins"),
    ("losses_by_ko", "losses_by_ko"),
    ("losses_by_submission", "losses_by_submission"),
    ("losses_by_decision", "losses_by_decision"),
    ("win_streak", "win_streak"),
    ("loss_streak", "loss_streak"),
    ("longest_win_streak", "longest_win_streak"),
    ("ko_streak", "ko_streak"),
    ("sub_streak", "sub_streak"),
)
_PERFORMANCE_FLOAT_FIELDS = (
    ("finish_rate", "finish_rate"),
    ("avg_fight_time_minutes", "avg_fight_time"),
    ("strike_accuracy", "strike_accuracy"),
    ("strike_defense", "strike_defense"),
    ("takedown_avg", "takedown_avg"),
    ("takedown_accuracy", "takedown_accuracy"),
    ("strikes_landed_per_min", "strikes_landed_per_min"),
    ("strikes_absorbed_per_min", "strikes_absorbed_per_min"),
    ("takedown_defense", "takedown_defense"),
    ("submission_defense", "submission_defense"),
    ("submission_avg", "submission_avg"),
)


@dataclass(frozen=True)
class FieldFallback:
    row_index: int
    field: str
    raw_value: str
    applied_value: object


@dataclass(frozen=True)
class SkippedRow:
    row_index: int
    reason: str


@dataclass(frozen=True)
class ImportReport:
    total_rows: int
    imported_rows: int
    skipped_rows: List[SkippedRow] = field(default_factory=list)
    fallbacks: List[FieldFallback] = field(default_factory=list)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return "".join(reversed(digits))


def generate_fighter_id(first_name: str, last_name: str, now: datetime) -> str:
    """Build ``first-last-<base36 epoch ms>`` from a fighter's name."""

    base = re.sub(r"\s+", "-", f"{first_name}-{last_name}".lower())
    base = re.sub(r"[^a-z0-9-]", "", base)
    return f"{base}-{_to_base36(int(now.timestamp() * 1000))}"


def get_mapped_value(
    row: Mapping[str, str],
    mappings: Sequence[FieldMapping],
    system_field: str,
) -> Optional[str]:
    """Return the trimmed cell mapped to ``system_field``, or ``None``.

    The first mapping targeting the field wins whatever its status, so an
    ``ignored`` entry that still names a system field is resolved too.
    """

    for mapping in mappings:
        if mapping.system_field == system_field:
            value = row.get(mapping.csv_field)
            if value is None:
                return None
            value = value.strip()
            return value or None
    return None


class _RowReader:
    """Resolve and normalize the cells of a single row, collecting fallbacks."""

    def __init__(
        self,
        row: Mapping[str, str],
        mappings: Sequence[FieldMapping],
        row_index: int,
        fallbacks: Optional[List[FieldFallback]],
    ) -> None:
        self.row = row
        self.mappings = mappings
        self.row_index = row_index
        self.fallbacks = fallbacks

    def text(self, system_field: str, default: Optional[str] = None) -> Optional[str]:
        return get_mapped_value(self.row, self.mappings, system_field) or default

    def normalized(
        self,
        system_field: str,
        normalizer: Callable[..., NormalizationResult],
        *args,
        default: Optional[str] = None,
    ):
        result = normalizer(self.text(system_field, default), *args)
        if result.fallback_applied and self.fallbacks is not None:
            logger.debug(
                "Row %d: %s value %r replaced with %r",
                self.row_index,
                system_field,
                result.raw,
                result.value,
            )
            self.fallbacks.append(
                FieldFallback(
                    row_index=self.row_index,
                    field=system_field,
                    raw_value=result.raw or "",
                    applied_value=result.value,
                )
            )
        return result.value

    def optional_rank(self, system_field: str) -> Optional[int]:
        # A literal 0 is treated the same as a missing rank.
        return self.normalized(system_field, parse_int, 0) or None


def _transform_row(
    row: Mapping[str, str],
    mappings: Sequence[FieldMapping],
    *,
    row_index: int,
    now: datetime,
    fallbacks: Optional[List[FieldFallback]] = None,
    taken_ids: Optional[Set[str]] = None,
) -> Tuple[Optional[Fighter], Optional[str]]:
    reader = _RowReader(row, mappings, row_index, fallbacks)

    first_name = reader.text("first_name", "")
    last_name = reader.text("last_name", "")
    weight_class = reader.text("weight_class", "")

    if not first_name or not last_name:
        logger.warning("Skipping row %d: missing required name fields", row_index)
        return None, "missing required name fields"
    if not weight_class:
        logger.warning("Skipping row %d: missing weight class", row_index)
        return None, "missing weight class"

    fighter_id = reader.text("id")
    if fighter_id is None:
        fighter_id = generate_fighter_id(first_name, last_name, now)
        if taken_ids is not None:
            # Same name within the same millisecond: step the suffix forward.
            offset = 1
            while fighter_id in taken_ids:
                fighter_id = generate_fighter_id(
                    first_name, last_name, now + timedelta(milliseconds=offset)
                )
                offset += 1
    if taken_ids is not None:
        taken_ids.add(fighter_id)

    physical = {attr: reader.normalized(name, parse_int, 0) for attr, name in _PHYSICAL_INT_FIELDS}
    physical.update({attr: reader.text(name, "") for attr, name in _PHYSICAL_TEXT_FIELDS})
    record = {attr: reader.normalized(name, parse_int, 0) for attr, name in _RECORD_FIELDS}
    performance = {attr: reader.normalized(name, parse_int, 0) for attr, name in _PERFORMANCE_INT_FIELDS}
    performance.update(
        {attr: reader.normalized(name, parse_number, 0.0) for attr, name in _PERFORMANCE_FLOAT_FIELDS}
    )

    fighter = Fighter(
        id=fighter_id,
        first_name=first_name,
        last_name=last_name,
        nickname=reader.text("nickname"),
        date_of_birth=reader.text("date_of_birth", ""),
        nationality=reader.text("nationality", "Unknown"),
        gender=reader.normalized("gender", normalize_gender, default="Male"),
        weight_class=reader.normalized("weight_class", normalize_weight_class),
        stance=reader.normalized("stance", normalize_stance, default="Orthodox"),
        gym=reader.text("gym", "Unknown"),
        head_coach=reader.text("head_coach", "Unknown"),
        team=reader.text("team"),
        fighting_out_of=reader.text("fighting_out_of"),
        image_url=reader.text("image_url", "/placeholder.svg"),
        body_image_url=reader.text("body_image_url"),
        organization=reader.normalized("organization", normalize_organization, default="UFC"),
        physical_stats=PhysicalStats(**physical),
        record=FighterRecord(**record),
        performance=PerformanceMetrics(**performance),
        history=[],
        notes=[],
        risk_signals=[],
        is_active=reader.normalized("is_active", parse_boolean, default="true"),
        ranking=reader.optional_rank("ranking"),
        rank_global=reader.optional_rank("rank_global"),
        rank_promotion=reader.optional_rank("rank_promotion"),
        is_champion=reader.normalized("is_champion", parse_boolean),
        is_verified=reader.normalized("is_verified", parse_boolean),
        last_updated=now,
        created_at=now,
    )
    return fighter, None


def transform_csv_to_fighter(
    row: Mapping[str, str],
    mappings: Sequence[FieldMapping],
    *,
    clock: Clock | None = None,
    row_index: int = 0,
) -> Optional[Fighter]:
    """Build a fighter from one row, or ``None`` when required data is missing.

    Only a missing first name, last name or weight class rejects the row.
    Every other field falls back to its default when absent or unparseable.
    """

    now = (clock or _utc_now)()
    fighter, _ = _transform_row(row, mappings, row_index=row_index, now=now)
    return fighter


def transform_csv_data_to_fighters(
    rows: Sequence[Mapping[str, str]],
    mappings: Sequence[FieldMapping],
    *,
    clock: Clock | None = None,
) -> List[Fighter]:
    fighters, _ = build_import_report(rows, mappings, clock=clock)
    return fighters


def build_import_report(
    rows: Sequence[Mapping[str, str]],
    mappings: Sequence[FieldMapping],
    *,
    clock: Clock | None = None,
) -> Tuple[List[Fighter], ImportReport]:
    """Transform every row and report skipped rows and default substitutions."""

    clock = clock or _utc_now
    fighters: List[Fighter] = []
    skipped: List[SkippedRow] = []
    fallbacks: List[FieldFallback] = []
    taken_ids: Set[str] = set()
    for index, row in enumerate(rows):
        fighter, reason = _transform_row(
            row,
            mappings,
            row_index=index,
            now=clock(),
            fallbacks=fallbacks,
            taken_ids=taken_ids,
        )
        if fighter is None:
            skipped.append(SkippedRow(row_index=index, reason=reason or "invalid row"))
            continue
        fighters.append(fighter)

    report = ImportReport(
        total_rows=len(rows),
        imported_rows=len(fighters),
        skipped_rows=skipped,
        fallbacks=fallbacks,
    )
    return fighters, report


def validate_mappings(mappings: Sequence[FieldMapping]) -> MappingValidation:
    """Check that every required field has a ``mapped`` column.

    Advisory only: the transformers never call this and apply their own
    per-row checks.
    """

    mapped_fields = {
        mapping.system_field
        for mapping in mappings
        if mapping.system_field and mapping.status == MappingStatus.MAPPED
    }
    missing = [name for name in REQUIRED_MAPPING_FIELDS if name not in mapped_fields]
    return MappingValidation(is_valid=not missing, missing_fields=missing)
