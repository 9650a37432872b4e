"""
Classification Pipeline - single entry point for classifying feed items.

Pipeline Flow:
1. Keyword-only mode (user preference) or no API key: keyword classifier, done
2. Otherwise: model classifier over the whole batch, per-item fallback inside
3. Systemic failure or batch timeout: keyword classifier for the whole batch,
   with a warning the caller can surface

A result set always comes from one batch strategy; partial model results
are discarded before a keyword pass.
"""
import asyncio
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from loguru import logger

from constants import ClassificationMode, ClassificationStrategy
from .classifier import KeywordClassifier, ModelClassifier, with_fallback_async
from .models import Alert, FeedItem


FALLBACK_WARNING = "סיווג AI נכשל, המערכת עברה לסיווג מבוסס מילות מפתח"


@dataclass
class ClassificationRun:
    """Alerts from one refresh plus how they were produced."""
    alerts: list[Alert]
    strategy: ClassificationStrategy
    warning: Optional[str] = None

    @property
    def fell_back(self) -> bool:
        return self.warning is not None

    @property
    def relevant(self) -> list[Alert]:
        return relevant_alerts(self.alerts)

    def to_dict(self) -> dict:
        return {
            "strategy": self.strategy.value,
            "warning": self.warning,
            "total": len(self.alerts),
            "relevant": len(self.relevant),
            "alerts": [alert.to_dict() for alert in self.alerts],
        }


def relevant_alerts(alerts: Iterable[Alert]) -> list[Alert]:
    return [alert for alert in alerts if alert.is_relevant]


def ensure_ids(alerts: Iterable[Alert]) -> list[Alert]:
    """Backfill missing alert ids."""
    return [alert.with_id() for alert in alerts]


class ClassificationPipeline:
    """
    Orchestrates the model and keyword classifiers.

    Idempotent for fixed inputs and model behaviour, apart from fresh ids.
    """

    def __init__(
        self,
        model_classifier: Optional[ModelClassifier] = None,
        keyword_classifier: Optional[KeywordClassifier] = None,
        batch_timeout: Optional[float] = None,
    ):
        """
        Args:
            model_classifier: External-model strategy
            keyword_classifier: Fallback strategy, shared with the model classifier
            batch_timeout: Seconds before the model batch is abandoned (None = no limit)
        """
        self.keyword_classifier = keyword_classifier or KeywordClassifier()
        self.model_classifier = model_classifier or ModelClassifier(fallback=self.keyword_classifier)
        self.batch_timeout = batch_timeout

    async def _classify_with_model(self, items: list[FeedItem], user_location: str) -> list[Alert]:
        task = self.model_classifier.classify_batch(items, user_location)
        if self.batch_timeout is None:
            return await task
        # wait_for cancels the in-flight batch on timeout
        return await asyncio.wait_for(task, timeout=self.batch_timeout)

    async def run(
        self,
        items: Iterable[FeedItem],
        user_location: str,
        mode: ClassificationMode = ClassificationMode.AUTO,
        on_warning: Optional[Callable[[str], None]] = None,
    ) -> ClassificationRun:
        """
        Classify a batch of feed items for a user location.

        Args:
            items: Items from the feed collaborator
            user_location: The user's city
            mode: AUTO (model first) or KEYWORD_ONLY
            on_warning: Called with a user-facing message when the batch fell back

        Returns:
            ClassificationRun with security alerts only
        """
        items = list(items)
        logger.info(f"=== Classifying {len(items)} items for location: {user_location} (mode={mode.value}) ===")

        if mode is ClassificationMode.KEYWORD_ONLY:
            return self._keyword_run(items, user_location)

        if not self.model_classifier.has_credentials():
            # a missing key is a configured degrade, not a failure: no warning
            logger.bind(degraded=True).warning("No API key configured, classifying batch with keywords")
            return self._keyword_run(items, user_location)

        failure: list[BaseException] = []

        alerts = await with_fallback_async(
            self._classify_with_model,
            self.keyword_classifier.classify_all,
            items,
            user_location,
            label="Model batch classification",
            on_fallback=failure.append,
        )

        if failure:
            run = ClassificationRun(
                alerts=ensure_ids(alerts),
                strategy=ClassificationStrategy.KEYWORD,
                warning=FALLBACK_WARNING,
            )
            if on_warning is not None:
                on_warning(run.warning)
        else:
            run = ClassificationRun(alerts=ensure_ids(alerts), strategy=ClassificationStrategy.MODEL)

        self._log_run(run)
        return run

    def _keyword_run(self, items: list[FeedItem], user_location: str) -> ClassificationRun:
        alerts = self.keyword_classifier.classify_all(items, user_location)
        run = ClassificationRun(alerts=ensure_ids(alerts), strategy=ClassificationStrategy.KEYWORD)
        self._log_run(run)
        return run

    def _log_run(self, run: ClassificationRun) -> None:
        relevant = run.relevant
        logger.info(
            f"Classification complete ({run.strategy.value}): "
            f"{len(run.alerts)} security events, {len(relevant)} relevant"
        )
        for alert in relevant:
            logger.debug(f"Relevant alert: '{alert.title[:60]}' | Location: {alert.location}")


async def refresh_classified_alerts(
    items: Iterable[FeedItem],
    user_location: str,
    mode: ClassificationMode = ClassificationMode.AUTO,
    on_warning: Optional[Callable[[str], None]] = None,
    pipeline: Optional[ClassificationPipeline] = None,
) -> list[Alert]:
    """Classify items and return security alerts; never raises for classification failures."""
    pipeline = pipeline or ClassificationPipeline()
    run = await pipeline.run(items, user_location, mode=mode, on_warning=on_warning)
    return run.alerts


def refresh_classified_alerts_sync(
    items: Iterable[FeedItem],
    user_location: str,
    mode: ClassificationMode = ClassificationMode.AUTO,
    on_warning: Optional[Callable[[str], None]] = None,
    pipeline: Optional[ClassificationPipeline] = None,
) -> list[Alert]:
    """Synchronous wrapper for callers without an event loop."""
    return asyncio.run(
        refresh_classified_alerts(items, user_location, mode=mode, on_warning=on_warning, pipeline=pipeline)
    )
