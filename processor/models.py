"""
Data models shared by the classifiers and the pipeline.
"""
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Optional
from urllib.parse import urlsplit

from dateutil import parser as date_parser

from constants import UNKNOWN_LOCATION, ClassificationStrategy


def parse_timestamp(value: Any) -> datetime:
    """
    Parse a feed timestamp; datetimes pass through.

    ISO-8601 (``Z`` suffix allowed) is tried first, then anything dateutil
    understands, including the RFC-822 dates RSS feeds carry.
    """
    if isinstance(value, datetime):
        return value
    if not value:
        return datetime.now(timezone.utc)
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return date_parser.parse(text)


def source_from_link(link: str) -> str:
    """Source name for an alert: the link's host without a leading ``www.``."""
    try:
        host = urlsplit(link or "").hostname
    except ValueError:
        host = None
    if not host:
        return UNKNOWN_LOCATION
    return host[4:] if host.startswith("www.") else host


def new_alert_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class FeedItem:
    """A normalized RSS item supplied by the feed-fetching collaborator."""
    title: str
    description: str
    link: str
    published_at: datetime
    guid: str = ""

    @property
    def text(self) -> str:
        """Title and description as one blob, the unit both classifiers read."""
        return f"{self.title} {self.description}"

    @classmethod
    def from_dict(cls, data: dict) -> "FeedItem":
        """Build from a feed dict; accepts ``pubDate`` or ``published_at``."""
        return cls(
            title=data.get("title", "") or "",
            description=data.get("description", "") or "",
            link=data.get("link", "") or "",
            published_at=parse_timestamp(data.get("published_at", data.get("pubDate"))),
            guid=data.get("guid", "") or "",
        )


@dataclass(frozen=True)
class ClassificationResult:
    """Per-item verdict from either classification strategy."""
    is_security_event: bool
    raw_location: Optional[str] = None

    @property
    def location(self) -> str:
        return self.raw_location or UNKNOWN_LOCATION

    def to_dict(self) -> dict:
        return {
            "is_security_event": self.is_security_event,
            "location": self.raw_location,
        }


@dataclass(frozen=True)
class Alert:
    """
    A classified, relevance-flagged feed item.

    Invariants enforced on construction:
    - ``location`` is never empty (the "Unknown" sentinel stands in)
    - ``is_relevant`` implies ``is_security_event``
    """
    title: str
    description: str
    location: str
    timestamp: datetime
    is_relevant: bool
    is_security_event: bool
    source: str
    link: str
    id: str = field(default_factory=new_alert_id)
    image_url: Optional[str] = None
    classified_by: ClassificationStrategy = ClassificationStrategy.KEYWORD

    def __post_init__(self):
        if not self.location or not self.location.strip():
            object.__setattr__(self, "location", UNKNOWN_LOCATION)
        if self.is_relevant and not self.is_security_event:
            raise ValueError(f"Alert marked relevant but not a security event: {self.title[:50]}")

    @classmethod
    def from_item(
        cls,
        item: FeedItem,
        result: ClassificationResult,
        is_relevant: bool,
        classified_by: ClassificationStrategy,
    ) -> "Alert":
        return cls(
            title=item.title,
            description=item.description,
            location=result.location,
            timestamp=item.published_at,
            is_relevant=is_relevant and result.is_security_event,
            is_security_event=result.is_security_event,
            source=source_from_link(item.link),
            link=item.link,
            classified_by=classified_by,
        )

    def with_id(self) -> "Alert":
        """Return this alert, or a copy with a fresh id if it has none."""
        if self.id:
            return self
        return replace(self, id=new_alert_id())

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "location": self.location,
            "timestamp": self.timestamp.isoformat(),
            "is_relevant": self.is_relevant,
            "is_security_event": self.is_security_event,
            "source": self.source,
            "link": self.link,
            "image_url": self.image_url,
            "classified_by": self.classified_by.value,
        }
