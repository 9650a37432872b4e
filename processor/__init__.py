"""
Processor package for the Security Alert Classifier.

Classification flow:
- Model classifier: external LLM, per-item keyword fallback
- Keyword classifier: lexicon + gazetteer, no external calls
- Location matcher: decides relevance for the user's location

Main entry point: refresh_classified_alerts / ClassificationPipeline
"""

from .models import Alert, ClassificationResult, FeedItem, source_from_link
from .location import fold_location, is_location_relevant, normalize_location
from .classifier import (
    KeywordClassifier,
    ModelClassifier,
    ResponseParseError,
    classify_alerts,
)
from .pipeline import (
    ClassificationPipeline,
    ClassificationRun,
    ensure_ids,
    refresh_classified_alerts,
    refresh_classified_alerts_sync,
    relevant_alerts,
)

__all__ = [
    # Pipeline
    "ClassificationPipeline",
    "ClassificationRun",
    "refresh_classified_alerts",
    "refresh_classified_alerts_sync",
    "relevant_alerts",
    "ensure_ids",
    # Classifiers
    "KeywordClassifier",
    "ModelClassifier",
    "ResponseParseError",
    "classify_alerts",
    # Location
    "normalize_location",
    "fold_location",
    "is_location_relevant",
    # Models
    "Alert",
    "ClassificationResult",
    "FeedItem",
    "source_from_link",
]
