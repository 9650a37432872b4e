"""
Shared Enums

Application-wide enums used by the classifier, pipeline and scheduler.
"""
from enum import Enum


class ClassificationMode(str, Enum):
    """How the pipeline is asked to classify a batch."""
    AUTO = "auto"                  # external model first, keywords on failure
    KEYWORD_ONLY = "keyword_only"  # user preference: never call the model


class ClassificationStrategy(str, Enum):
    """Which strategy actually produced an alert."""
    MODEL = "model"
    KEYWORD = "keyword"
