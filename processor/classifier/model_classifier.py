"""
Model Classifier - security-event classification with an external LLM.

Per item:
- no credential          -> keyword classifier
- transport error        -> keyword classifier
- malformed answer       -> keyword classifier
- valid answer           -> alert built from the model's verdict

The model's location is used as given (not mapped through the gazetteer) so
places missing from the static tables still count.
"""
import asyncio
from typing import Iterable, Optional

from loguru import logger

from config import settings
from constants import ClassificationStrategy
from llm import CredentialChain, LLMClient, default_chain, get_client
from processor.location import is_location_relevant
from processor.models import Alert, FeedItem
from prompts import PromptLoader
from .fallback import with_fallback
from .keyword_classifier import KeywordClassifier
from .output_parser import ClassificationOutputParser


class ModelClassifier:
    """
    Classifies feed items by asking an external model two questions.

    The client is created lazily from the credential chain unless one is
    passed in. Single-item calls never raise; batch calls raise only when
    the batch cannot be dispatched at all.
    """

    PROMPT_NAME = "classification"

    def __init__(
        self,
        client: Optional[LLMClient] = None,
        credentials: Optional[CredentialChain] = None,
        fallback: Optional[KeywordClassifier] = None,
        prompt_loader: Optional[PromptLoader] = None,
        max_concurrency: Optional[int] = None,
        max_tokens: int = 100,
    ):
        """
        Args:
            client: LLM client; built from ``credentials`` when omitted
            credentials: Key sources; defaults to ``default_chain()``
            fallback: Keyword classifier used on every degrade path
            prompt_loader: Prompt source; defaults to the bundled prompts
            max_concurrency: Max in-flight model calls per batch
            max_tokens: Answer budget; the JSON answer is tiny
        """
        self._client = client
        self._credentials = credentials
        self.fallback = fallback or KeywordClassifier()
        self.prompt_loader = prompt_loader or PromptLoader()
        self.parser = ClassificationOutputParser()
        self.max_concurrency = max_concurrency or settings.LLM_MAX_CONCURRENCY
        self.max_tokens = max_tokens

    def resolve_client(self) -> Optional[LLMClient]:
        """The configured client, or None when no API key is available."""
        if self._client is not None:
            return self._client
        api_key = (self._credentials or default_chain()).resolve()
        if not api_key:
            return None
        self._client = get_client(api_key=api_key)
        return self._client

    def has_credentials(self) -> bool:
        """Whether a client is set or an API key can be found."""
        if self._client is not None:
            return True
        return bool((self._credentials or default_chain()).resolve())

    def build_prompt(self, item: FeedItem) -> str:
        return self.prompt_loader.format(self.PROMPT_NAME, text=item.text)

    def classify_with_model(self, client: LLMClient, item: FeedItem, user_location: str) -> Alert:
        """
        Model path only; raises ``LLMError`` or ``ResponseParseError``.
        """
        response = client.generate(
            prompt=self.build_prompt(item),
            max_tokens=self.max_tokens,
            temperature=0.0,
        )
        logger.debug(f"Model answer for '{item.title[:40]}': {response.content!r}")

        result = self.parser.parse(response.content)
        is_relevant = (
            result.is_security_event
            and result.raw_location is not None
            and is_location_relevant(result.raw_location, user_location)
        )
        return Alert.from_item(item, result, is_relevant, ClassificationStrategy.MODEL)

    def classify(self, item: FeedItem, user_location: str, client: Optional[LLMClient] = None) -> Alert:
        """Classify one item. Never raises; degrades to keywords."""
        if client is None:
            try:
                client = self.resolve_client()
            except Exception as e:
                logger.bind(degraded=True).warning(f"Could not create LLM client: {e}")
                client = None

        if client is None:
            logger.bind(degraded=True).warning("No API key configured, falling back to keyword method")
            return self.fallback.create_alert(item, user_location)

        return with_fallback(
            lambda i, loc: self.classify_with_model(client, i, loc),
            self.fallback.create_alert,
            item,
            user_location,
            label=f"Model classification of '{item.title[:40]}'",
        )

    async def classify_batch(self, items: Iterable[FeedItem], user_location: str) -> list[Alert]:
        """
        Classify items concurrently and keep only security events.

        Input order is preserved. Errors raised before dispatch (client
        construction) propagate so the caller can fall back for the batch.
        """
        items = list(items)
        client = self.resolve_client()

        if client is None:
            logger.bind(degraded=True).warning(
                "No API key configured, classifying batch with keywords"
            )
            return self.fallback.classify_all(items, user_location)

        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def _classify_one(item: FeedItem) -> Alert:
            async with semaphore:
                # LLMClient.generate() is blocking; run it off the event loop
                return await asyncio.to_thread(self.classify, item, user_location, client)

        logger.info(f"Classifying {len(items)} items with {client!r}")
        alerts = await asyncio.gather(*(_classify_one(item) for item in items))

        security_alerts = [alert for alert in alerts if alert.is_security_event]
        degraded = sum(1 for a in alerts if a.classified_by is ClassificationStrategy.KEYWORD)
        logger.info(
            f"Model classification: {len(security_alerts)}/{len(alerts)} security events"
            + (f" ({degraded} via keyword fallback)" if degraded else "")
        )
        return security_alerts
