"""
Location Normalizer - canonical forms for free-text place names.

Two forms are produced:
- display form (``normalize_location``): cleaned, aliased, original case
- fold form (``fold_location``): the display form case-folded; every
  comparison elsewhere uses this one

Tel Aviv is the one containment rule: any input mentioning Tel Aviv in any
spelling becomes the official "תל אביב-יפו". Other gazetteer aliases only
apply when they are the whole input.
"""
import re
from functools import lru_cache
from types import MappingProxyType
from typing import Mapping, Optional

from constants import GAZETTEER_ENTRIES, TEL_AVIV, UNKNOWN_LOCATION


_DASHES = re.compile(r"[‐‑‒–—―−־﹘﹣－]")
_DOUBLE_QUOTES = re.compile(r"[״“”„‟″＂]")
_SINGLE_QUOTES = re.compile(r"[׳‘’‛′＇`]")
_WHITESPACE = re.compile(r"\s+")

TEL_AVIV_MARKERS = ("תל אביב", "תל-אביב", "ת\"א", "tel aviv", "tel-aviv")

_UNKNOWN_SPELLINGS = frozenset({UNKNOWN_LOCATION, "unknown", "null", "none"})


def clean_text(text: Optional[str]) -> str:
    """Unify dash and quote variants, collapse whitespace and trim."""
    if not text:
        return ""
    text = _DASHES.sub("-", text)
    text = _DOUBLE_QUOTES.sub('"', text)
    text = _SINGLE_QUOTES.sub("'", text)
    return _WHITESPACE.sub(" ", text).strip()


def fold_text(text: Optional[str]) -> str:
    """Cleaned and case-folded free text, for substring matching."""
    return clean_text(text).casefold()


def mentions_tel_aviv(folded: str) -> bool:
    return any(marker in folded for marker in TEL_AVIV_MARKERS)


@lru_cache(maxsize=1)
def city_aliases() -> Mapping[str, str]:
    """Folded alias -> canonical city, built once from the gazetteer."""
    aliases = {}
    for entry in GAZETTEER_ENTRIES:
        for alias in entry.aliases:
            aliases.setdefault(fold_text(alias), entry.city)
    return MappingProxyType(aliases)


def normalize_location(raw: Optional[str]) -> str:
    """
    Canonical display form of a place name.

    Empty input and the usual "unknown" spellings map to the sentinel.
    Never raises.
    """
    cleaned = clean_text(raw)
    if not cleaned:
        return UNKNOWN_LOCATION

    folded = cleaned.casefold()
    if folded in _UNKNOWN_SPELLINGS:
        return UNKNOWN_LOCATION
    if mentions_tel_aviv(folded):
        return TEL_AVIV
    return city_aliases().get(folded, cleaned)


def fold_location(raw: Optional[str]) -> str:
    """Comparison form: ``normalize_location`` then case-fold."""
    return normalize_location(raw).casefold()
