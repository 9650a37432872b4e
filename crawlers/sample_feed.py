"""
Sample Feed - bundled feed items for demos and dry runs.

The feed fetcher itself lives outside this project; these items have the
same normalized shape it produces. ``load_feed_file`` reads such items from
a JSON dump (a list of objects with title/description/link/pubDate/guid).
"""
import json
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional

from loguru import logger

from processor.models import FeedItem


# (title, description, minutes ago)
_SAMPLE_ITEMS = [
    (
        "אזעקה בנהריה: חשד לחדירת כלי טיס עוין",
        "אזעקות נשמעו בנהריה ובסביבתה בעקבות חשד לחדירת כלי טיס עוין. תושבים דיווחו על יירוטים באזור.",
        25,
    ),
    (
        "שני חשודים נעצרו בחשד למעורבות בפיגוע בתל אביב",
        "המשטרה עצרה שני חשודים בחשד למעורבות בפיגוע שאירע הבוקר בתל אביב. האירוע הסתיים ללא נפגעים.",
        50,
    ),
    (
        "בעקבות התקרית בצפון: סגירת שדה התעופה ברמת דוד",
        "בעקבות חילופי האש בגבול הצפון, הוחלט על סגירת שדה התעופה ברמת דוד למשך מספר שעות.",
        120,
    ),
    (
        "המפלגות הגדולות חתמו על הסכם קואליציוני",
        "לאחר שבועות של משא ומתן, המפלגות הגדולות הגיעו להסכם קואליציוני והממשלה צפויה להיות מושבעת בימים הקרובים.",
        180,
    ),
    (
        "אזעקות נשמעות בירושלים וסביבתה",
        "אזעקות נשמעות בירושלים וביישובי הסביבה. תושבים מתבקשים להיכנס למרחבים מוגנים.",
        15,
    ),
]


def get_sample_items(now: Optional[datetime] = None) -> list[FeedItem]:
    """Sample items timestamped relative to ``now``."""
    now = now or datetime.now(timezone.utc)
    return [
        FeedItem(
            title=title,
            description=description,
            link=f"https://example.com/news/{index}",
            published_at=now - timedelta(minutes=minutes_ago),
            guid=str(index),
        )
        for index, (title, description, minutes_ago) in enumerate(_SAMPLE_ITEMS, start=1)
    ]


def load_feed_file(path: Path) -> list[FeedItem]:
    """
    Load normalized feed items from a JSON file.

    Entries that cannot be parsed are skipped with a warning.
    """
    path = Path(path)
    raw = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(raw, dict):
        raw = raw.get("items", [])

    items = []
    for index, entry in enumerate(raw):
        try:
            items.append(FeedItem.from_dict(entry))
        except (AttributeError, TypeError, ValueError, OverflowError) as e:
            logger.warning(f"Skipping feed entry {index} in {path.name}: {e}")
    logger.info(f"Loaded {len(items)} feed items from {path}")
    return items
