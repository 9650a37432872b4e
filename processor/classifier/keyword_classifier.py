"""
Keyword Classifier - Rule-based classification (No LLM needed)

Dependency-free fallback for the model classifier:
- security event: text contains an entry of the security lexicon
- location: first gazetteer city (in table order) with an alias in the text

Hebrew lexicon terms match as substrings so prefixed forms ("באזעקה") count.
English terms and all place names match on word boundaries; Hebrew place
names may carry up to two one-letter prefixes (ובתל אביב).
"""
import re
from typing import Iterable, Optional, Pattern

from loguru import logger

from constants import (
    AMBIGUOUS_ALIASES,
    GAZETTEER_ENTRIES,
    LOCATIVE_CUES,
    SECURITY_KEYWORDS,
    ClassificationStrategy,
)
from processor.location import fold_text, is_location_relevant
from processor.models import Alert, ClassificationResult, FeedItem


_HEBREW_PREFIXES = "[ובלמהכש]{0,2}-?"
_LOCATIVE_PREFIXES = "[ובש]?[בלמ]-?"
_CUES = "|".join(re.escape(fold_text(cue)) for cue in LOCATIVE_CUES)
_AMBIGUOUS = {fold_text(alias) for alias in AMBIGUOUS_ALIASES}


def _keyword_pattern(keyword: str) -> Pattern:
    if keyword.isascii():
        return re.compile(rf"(?<!\w){re.escape(keyword)}(?:s|es)?(?!\w)")
    return re.compile(re.escape(keyword))


def _alias_pattern(alias: str) -> Pattern:
    escaped = re.escape(alias)
    if alias.isascii():
        return re.compile(rf"(?<!\w){escaped}(?!\w)")
    if alias in _AMBIGUOUS:
        # construct state ("רחובות העיר") is the common noun
        return re.compile(rf"(?<!\w)(?:{_LOCATIVE_PREFIXES}|(?:{_CUES})\s+){escaped}(?!\w)(?!\s+ה\w)")
    return re.compile(rf"(?<!\w){_HEBREW_PREFIXES}{escaped}(?!\w)")


_FOLDED_KEYWORDS = tuple(
    (keyword, _keyword_pattern(keyword))
    for keyword in sorted(fold_text(keyword) for keyword in SECURITY_KEYWORDS)
)

_FOLDED_GAZETTEER = tuple(
    (entry.city, tuple(_alias_pattern(alias) for alias in sorted(fold_text(a) for a in entry.aliases)))
    for entry in GAZETTEER_ENTRIES
)


def find_security_keyword(text: str) -> Optional[str]:
    """Return the first lexicon term found in the text, if any."""
    folded = fold_text(text)
    for keyword, pattern in _FOLDED_KEYWORDS:
        if pattern.search(folded):
            return keyword
    return None


def detect_location(text: str) -> Optional[str]:
    """Return the canonical city of the first gazetteer entry mentioned in the text."""
    folded = fold_text(text)
    for city, patterns in _FOLDED_GAZETTEER:
        if any(pattern.search(folded) for pattern in patterns):
            return city
    return None


class KeywordClassifier:
    """Classifies feed items with the static lexicon and gazetteer."""

    def classify(self, item: FeedItem) -> ClassificationResult:
        text = item.text
        keyword = find_security_keyword(text)
        location = detect_location(text)
        if keyword:
            logger.debug(f"Keyword '{keyword}' matched: {item.title[:50]}")
        return ClassificationResult(is_security_event=keyword is not None, raw_location=location)

    def create_alert(self, item: FeedItem, user_location: str) -> Alert:
        """Classify one item and decide its relevance for the user."""
        result = self.classify(item)
        is_relevant = result.is_security_event and is_location_relevant(result.location, user_location)
        return Alert.from_item(item, result, is_relevant, ClassificationStrategy.KEYWORD)

    def classify_all(self, items: Iterable[FeedItem], user_location: str) -> list[Alert]:
        """Classify a batch; only security events are returned."""
        alerts = [self.create_alert(item, user_location) for item in items]
        security_alerts = [alert for alert in alerts if alert.is_security_event]
        logger.info(
            f"Keyword classification: {len(security_alerts)}/{len(alerts)} security events"
        )
        return security_alerts


def classify_alerts(items: Iterable[FeedItem], user_location: str) -> list[Alert]:
    """Convenience wrapper around ``KeywordClassifier().classify_all``."""
    return KeywordClassifier().classify_all(items, user_location)
