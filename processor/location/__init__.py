"""
Location handling: place-name normalization and relevance matching.
"""

from .normalizer import clean_text, fold_text, normalize_location, fold_location
from .matcher import is_location_relevant, is_national, is_nearby
from .geocode import haversine_km, reverse_geocode

__all__ = [
    "clean_text",
    "fold_text",
    "normalize_location",
    "fold_location",
    "is_location_relevant",
    "is_national",
    "is_nearby",
    "haversine_km",
    "reverse_geocode",
]
