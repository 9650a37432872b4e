"""
Classifier Module - security-event classification strategies.

Components:
- KeywordClassifier: lexicon and gazetteer matching, no external calls
- ModelClassifier: external LLM with per-item keyword fallback
- ClassificationOutputParser: strict parsing of the model's JSON answer
- with_fallback / with_fallback_async: primary-then-secondary combinators
"""

from .keyword_classifier import (
    KeywordClassifier,
    classify_alerts,
    detect_location,
    find_security_keyword,
)
from .output_parser import (
    ClassificationOutputParser,
    ResponseParseError,
    parse_classification_response,
)
from .fallback import with_fallback, with_fallback_async
from .model_classifier import ModelClassifier


__all__ = [
    "KeywordClassifier",
    "ModelClassifier",
    "ClassificationOutputParser",
    "ResponseParseError",
    "classify_alerts",
    "detect_location",
    "find_security_keyword",
    "parse_classification_response",
    "with_fallback",
    "with_fallback_async",
]
