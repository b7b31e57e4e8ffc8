"""Coerce raw CSV cells into typed fighter values.

Every normalizer is total: any string (or ``None``) maps to a value and
nothing raises. Unrecognized input falls back to a documented default and
the result carries ``fallback_applied`` so callers can report it. An empty
or missing cell is not a fallback, it simply takes the default.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from grit.models import Gender, Organization, Stance, WeightClass


T = TypeVar("T")

_FLOAT_STRIP = re.compile(r"[^0-9.\-]")
_INT_STRIP = re.compile(r"[^0-9\-]")
_FLOAT_PREFIX = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)")
_INT_PREFIX = re.compile(r"-?\d+")

_TRUE_TOKENS = {"true", "yes", "1", "y", "active"}
_FALSE_TOKENS = {"false", "no", "0", "n", "inactive"}
_FEMALE_TOKENS = {"female", "f", "woman", "w"}
_MALE_TOKENS = {"male", "m", "man"}


@dataclass(frozen=True)
class NormalizationResult(Generic[T]):
    value: T
    raw: Optional[str] = None
    fallback_applied: bool = False


def _clean(value: Optional[str]) -> str:
    return value.strip() if value else ""


def normalize_organization(value: Optional[str]) -> NormalizationResult[Organization]:
    text = _clean(value).upper()
    if not text:
        return NormalizationResult(Organization.UFC, value)
    try:
        return NormalizationResult(Organization(text), value)
    except ValueError:
        return NormalizationResult(Organization.UFC, value, fallback_applied=True)


def normalize_weight_class(value: Optional[str]) -> NormalizationResult[WeightClass]:
    """Match a weight class exactly, then by containment, else Welterweight.

    Containment is checked in both directions and the first class in
    declaration order wins, so a vague input like ``"weight"`` resolves
    to Heavyweight.
    """

    text = _clean(value).lower()
    if not text:
        return NormalizationResult(WeightClass.WELTERWEIGHT, value)

    for weight_class in WeightClass:
        if weight_class.value.lower() == text:
            return NormalizationResult(weight_class, value)

    for weight_class in WeightClass:
        candidate = weight_class.value.lower()
        if text in candidate or candidate in text:
            return NormalizationResult(weight_class, value)

    return NormalizationResult(WeightClass.WELTERWEIGHT, value, fallback_applied=True)


def normalize_stance(value: Optional[str]) -> NormalizationResult[Stance]:
    text = _clean(value).lower()
    if text in {"southpaw", "south paw"}:
        return NormalizationResult(Stance.SOUTHPAW, value)
    if text == "switch":
        return NormalizationResult(Stance.SWITCH, value)
    return NormalizationResult(Stance.ORTHODOX, value, fallback_applied=text not in {"", "orthodox"})


def normalize_gender(value: Optional[str]) -> NormalizationResult[Gender]:
    text = _clean(value).lower()
    if text in _FEMALE_TOKENS:
        return NormalizationResult(Gender.FEMALE, value)
    return NormalizationResult(Gender.MALE, value, fallback_applied=bool(text) and text not in _MALE_TOKENS)


def parse_number(value: Optional[str], default: float = 0.0) -> NormalizationResult[float]:
    """Parse the leading decimal number after dropping stray characters."""

    if not value:
        return NormalizationResult(default, value)
    match = _FLOAT_PREFIX.match(_FLOAT_STRIP.sub("", value))
    if match is None:
        return NormalizationResult(default, value, fallback_applied=True)
    parsed = float(match.group(0))
    if not math.isfinite(parsed):
        return NormalizationResult(default, value, fallback_applied=True)
    return NormalizationResult(parsed, value)


def parse_int(value: Optional[str], default: int = 0) -> NormalizationResult[int]:
    """Parse the leading integer; decimal points are dropped, not rounded."""

    if not value:
        return NormalizationResult(default, value)
    match = _INT_PREFIX.match(_INT_STRIP.sub("", value))
    if match is None:
        return NormalizationResult(default, value, fallback_applied=True)
    try:
        parsed = int(match.group(0))
    except ValueError:
        # Digit strings past the interpreter's conversion limit.
        return NormalizationResult(default, value, fallback_applied=True)
    return NormalizationResult(parsed, value)


def parse_boolean(value: Optional[str]) -> NormalizationResult[bool]:
    text = _clean(value).lower()
    if text in _TRUE_TOKENS:
        return NormalizationResult(True, value)
    return NormalizationResult(False, value, fallback_applied=bool(text) and text not in _FALSE_TOKENS)
