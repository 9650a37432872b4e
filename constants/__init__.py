"""
Constants package for the Security Alert Classifier.

Static place tables, the security lexicon and shared enums.
"""

from .enums import ClassificationMode, ClassificationStrategy
from .gazetteer import (
    UNKNOWN_LOCATION,
    TEL_AVIV,
    GazetteerEntry,
    ProximityEntry,
    GAZETTEER_ENTRIES,
    GAZETTEER,
    PROXIMITY_ENTRIES,
    PROXIMITY_MAP,
    NATIONAL_TOKENS,
    AMBIGUOUS_ALIASES,
    LOCATIVE_CUES,
    CityCoordinates,
    CITY_COORDINATES,
)
from .keywords import SECURITY_KEYWORDS

__all__ = [
    "ClassificationMode",
    "ClassificationStrategy",
    "UNKNOWN_LOCATION",
    "TEL_AVIV",
    "GazetteerEntry",
    "ProximityEntry",
    "GAZETTEER_ENTRIES",
    "GAZETTEER",
    "PROXIMITY_ENTRIES",
    "PROXIMITY_MAP",
    "NATIONAL_TOKENS",
    "AMBIGUOUS_ALIASES",
    "LOCATIVE_CUES",
    "CityCoordinates",
    "CITY_COORDINATES",
    "SECURITY_KEYWORDS",
]
