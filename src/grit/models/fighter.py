"""Canonical fighter models produced by the import pipeline."""

from __future__ import annotations

import enum
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from pydantic.config import ConfigDict


class WeightClass(str, enum.Enum):
    HEAVYWEIGHT = "Heavyweight"
    LIGHT_HEAVYWEIGHT = "Light Heavyweight"
    MIDDLEWEIGHT = "Middleweight"
    WELTERWEIGHT = "Welterweight"
    LIGHTWEIGHT = "Lightweight"
    FEATHERWEIGHT = "Featherweight"
    BANTAMWEIGHT = "Bantamweight"
    FLYWEIGHT = "Flyweight"
    WOMENS_FEATHERWEIGHT = "Women's Featherweight"
    WOMENS_BANTAMWEIGHT = "Women's Bantamweight"
    WOMENS_FLYWEIGHT = "Women's Flyweight"
    WOMENS_STRAWWEIGHT = "Women's Strawweight"


class Organization(str, enum.Enum):
    UFC = "UFC"
    ONE = "ONE"
    PFL = "PFL"
    BELLATOR = "BELLATOR"


class Stance(str, enum.Enum):
    ORTHODOX = "Orthodox"
    SOUTHPAW = "Southpaw"
    SWITCH = "Switch"


class Gender(str, enum.Enum):
    MALE = "Male"
    FEMALE = "Female"


class PhysicalStats(BaseModel):
    age: int = 0
    height: str = ""
    height_inches: int = 0
    reach: str = ""
    reach_inches: int = 0
    leg_reach: str = ""
    leg_reach_inches: int = 0
    weight: int = 0

    model_config = ConfigDict(frozen=True)


class FighterRecord(BaseModel):
    """Professional win/loss record."""

    wins: int = 0
    losses: int = 0
    draws: int = 0
    no_contests: int = 0

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class PerformanceMetrics(BaseModel):
    ko_wins: int = 0
    tko_wins: int = 0
    submission_wins: int = 0
    decision_wins: int = 0
    losses_by_ko: int = 0
    losses_by_submission: int = 0
    losses_by_decision: int = 0
    finish_rate: float = 0.0
    avg_fight_time_minutes: float = 0.0
    strike_accuracy: float = 0.0
    strike_defense: float = 0.0
    takedown_avg: float = 0.0
    takedown_accuracy: float = 0.0
    strikes_landed_per_min: float = 0.0
    strikes_absorbed_per_min: float = 0.0
    takedown_defense: float = 0.0
    submission_defense: float = 0.0
    submission_avg: float = 0.0
    win_streak: int = 0
    loss_streak: int = 0
    longest_win_streak: int = 0
    ko_streak: int = 0
    sub_streak: int = 0

    model_config = ConfigDict(frozen=True)


class Fighter(BaseModel):
    """Normalized fighter payload handed to the bulk-import store.

    Attributes are snake_case; ``model_dump(by_alias=True)`` yields the
    camelCase shape the web client and bulk endpoint exchange.
    ``history``, ``notes`` and ``risk_signals`` are owned by other
    subsystems and are always empty on import.
    """

    id: str = Field(..., min_length=1)
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    nickname: Optional[str] = None
    date_of_birth: str = ""
    nationality: str = "Unknown"
    gender: Gender = Gender.MALE
    weight_class: WeightClass
    stance: Stance = Stance.ORTHODOX
    gym: str = "Unknown"
    head_coach: str = "Unknown"
    team: Optional[str] = None
    fighting_out_of: Optional[str] = None
    image_url: str = "/placeholder.svg"
    body_image_url: Optional[str] = None
    organization: Organization
    physical_stats: PhysicalStats = Field(default_factory=PhysicalStats)
    record: FighterRecord = Field(default_factory=FighterRecord)
    performance: PerformanceMetrics = Field(default_factory=PerformanceMetrics)
    history: List[Dict[str, Any]] = Field(default_factory=list)
    notes: List[Dict[str, Any]] = Field(default_factory=list)
    risk_signals: List[Dict[str, Any]] = Field(default_factory=list)
    is_active: bool = True
    ranking: Optional[int] = None
    rank_global: Optional[int] = None
    rank_promotion: Optional[int] = None
    is_champion: bool = False
    is_verified: bool = False
    last_updated: datetime
    created_at: datetime

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
