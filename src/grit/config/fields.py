"""System field catalog for fighter imports."""

from __future__ import annotations

from typing import Dict, Mapping, Tuple


FIGHTER_SYSTEM_FIELDS: Tuple[str, ...] = (
    "id", "first_name", "last_name", "nickname", "date_of_birth", "nationality", "gender",
    "organization", "weight_class", "stance", "gym", "head_coach", "team", "fighting_out_of",
    "age", "height", "height_inches", "weight", "reach", "reach_inches", "leg_reach", "leg_reach_inches",
    "wins", "losses", "draws", "no_contests",
    "ko_wins", "tko_wins", "submission_wins", "decision_wins", "finish_rate", "avg_fight_time",
    "losses_by_ko", "losses_by_submission", "losses_by_decision",
    "strike_accuracy", "takedown_accuracy", "strikes_landed_per_min", "strikes_absorbed_per_min",
    "strike_defense", "takedown_defense", "submission_defense", "takedown_avg", "submission_avg",
    "win_streak", "loss_streak", "longest_win_streak",
    "is_active", "ranking", "is_champion", "rank_global", "rank_promotion", "image_url",
)

# Fields accepted by the row transformer but not offered by the auto mapper.
EXTRA_SYSTEM_FIELDS: Tuple[str, ...] = (
    "body_image_url",
    "ko_streak",
    "sub_streak",
    "is_verified",
)

# Keys are system fields, values are normalized header spellings.
FIGHTER_FIELD_ALIASES: Mapping[str, Tuple[str, ...]] = {
    "first_name": ("firstname", "first"),
    "last_name": ("lastname", "last"),
    "weight_class": ("division", "class", "weightclass"),
    "organization": ("org", "promotion"),
    "gym": ("affiliation",),
    "nationality": ("country",),
    "strikes_landed_per_min": ("slpm",),
    "strike_accuracy": ("stracc", "straccpct"),
    "strikes_absorbed_per_min": ("sapm",),
    "strike_defense": ("strdef", "strdefpct"),
    "takedown_avg": ("tdavg",),
    "takedown_accuracy": ("tdacc", "tdaccpct"),
    "takedown_defense": ("tddef", "tddefpct"),
    "submission_avg": ("subavg",),
}

REQUIRED_MAPPING_FIELDS: Tuple[str, ...] = (
    "first_name",
    "last_name",
    "weight_class",
    "organization",
)

FIELD_LABELS: Dict[str, str] = {
    field: field.replace("_", " ").title() for field in FIGHTER_SYSTEM_FIELDS + EXTRA_SYSTEM_FIELDS
}


def known_system_fields() -> Tuple[str, ...]:
    """Every system field a mapping may target."""

    return FIGHTER_SYSTEM_FIELDS + EXTRA_SYSTEM_FIELDS


def is_known_system_field(field: str) -> bool:
    return field in FIGHTER_SYSTEM_FIELDS or field in EXTRA_SYSTEM_FIELDS
