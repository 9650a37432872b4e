"""
Location Relevance Matcher

Decides whether a security event's location concerns a user. Checks run
in order and stop at the first hit:

1. unknown detected location  -> not relevant
2. exact match                -> relevant
3. national/regional token    -> relevant
4. proximity map              -> relevant
5. containment either way     -> relevant

Recall is favoured over precision: a news item saying "near Ashdod" or
"central Israel" still reaches the people it concerns.
"""
from functools import lru_cache
from typing import Optional, Tuple

from constants import NATIONAL_TOKENS, PROXIMITY_ENTRIES, UNKNOWN_LOCATION
from .normalizer import fold_location, fold_text


_UNKNOWN_FOLDED = UNKNOWN_LOCATION.casefold()


@lru_cache(maxsize=1)
def _folded_national_tokens() -> Tuple[str, ...]:
    return tuple(sorted(fold_text(token) for token in NATIONAL_TOKENS))


@lru_cache(maxsize=1)
def _folded_proximity() -> Tuple[Tuple[str, Tuple[str, ...]], ...]:
    return tuple(
        (fold_location(entry.anchor), tuple(fold_text(s) for s in entry.satellites))
        for entry in PROXIMITY_ENTRIES
    )


def is_national(folded_location: str) -> bool:
    """True when the location names the whole country or a broad region."""
    return any(token in folded_location for token in _folded_national_tokens())


def is_nearby(folded_detected: str, folded_user: str) -> bool:
    """True when the user lives in an anchor city and a satellite is mentioned."""
    for anchor, satellites in _folded_proximity():
        if folded_user == anchor and any(s in folded_detected for s in satellites):
            return True
    return False


def is_location_relevant(detected_location: Optional[str], user_location: Optional[str]) -> bool:
    """Pure relevance decision for a detected location and a user location."""
    if not detected_location or detected_location == UNKNOWN_LOCATION:
        return False

    detected = fold_location(detected_location)
    if detected == _UNKNOWN_FOLDED:
        return False
    user = fold_location(user_location)

    if detected == user:
        return True
    if is_national(detected):
        return True
    if is_nearby(detected, user):
        return True
    if user != _UNKNOWN_FOLDED and (user in detected or detected in user):
        return True
    return False
