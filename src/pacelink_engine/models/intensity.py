"""Intensity normalization — one lookup table instead of substring checks."""

from __future__ import annotations

import unicodedata
from typing import Any

from pacelink_engine.models.enums import INTENSITY_KEYS, IntensityLevel

_ALIASES: dict[str, IntensityLevel] = {
    # stored keys
    "leve": IntensityLevel.LIGHT,
    "moderado": IntensityLevel.MODERATE,
    "forte": IntensityLevel.STRONG,
    "livre": IntensityLevel.FREE,
    # English synonyms seen in older rows
    "light": IntensityLevel.LIGHT,
    "easy": IntensityLevel.LIGHT,
    "low": IntensityLevel.LIGHT,
    "moderate": IntensityLevel.MODERATE,
    "medium": IntensityLevel.MODERATE,
    "strong": IntensityLevel.STRONG,
    "hard": IntensityLevel.STRONG,
    "high": IntensityLevel.STRONG,
    "free": IntensityLevel.FREE,
}


def _fold(text: str) -> str:
    decomposed = unicodedata.normalize("NFD", text.strip().lower())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def normalize_intensity(raw: Any) -> IntensityLevel:
    """Map a stored or user-supplied intensity value to an IntensityLevel.

    Accepts enum members, stored keys in any case/accenting and the English
    aliases above. Anything else is UNKNOWN.
    """
    if isinstance(raw, IntensityLevel):
        return raw
    if not isinstance(raw, str):
        return IntensityLevel.UNKNOWN
    return _ALIASES.get(_fold(raw), IntensityLevel.UNKNOWN)


def intensity_key(level: IntensityLevel) -> str:
    """Stored key for *level* (e.g. ``"moderado"``)."""
    return INTENSITY_KEYS[level]
