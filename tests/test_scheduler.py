import asyncio
import json
from datetime import datetime, timedelta

from constants import ClassificationMode, ClassificationStrategy
from crawlers import get_sample_items, load_feed_file
from scheduler import AlertScheduler


class Clock:
    def __init__(self):
        self.now = datetime(2024, 5, 1, 12, 0)

    def __call__(self):
        return self.now


def keyword_scheduler(feed_provider, clock=None, **kwargs) -> AlertScheduler:
    runs = []
    scheduler = AlertScheduler(
        feed_provider,
        sink=runs.append,
        user_location="ירושלים",
        mode=ClassificationMode.KEYWORD_ONLY,
        clock=clock or datetime.now,
        **kwargs,
    )
    scheduler.runs = runs
    return scheduler


def test_refresh_classifies_sample_feed():
    scheduler = keyword_scheduler(get_sample_items)

    run = asyncio.run(scheduler.refresh())

    assert run is scheduler.last_run
    assert scheduler.runs == [run]
    assert run.strategy is ClassificationStrategy.KEYWORD
    # the coalition story is the only non-security sample item
    assert len(run.alerts) == 4
    assert [a.location for a in run.relevant] == ["ירושלים"]


def test_async_feed_provider_is_awaited():
    async def provider():
        return get_sample_items()[:1]

    run = asyncio.run(keyword_scheduler(provider).refresh())

    assert [a.location for a in run.alerts] == ["נהריה"]


def test_feed_provider_failure_is_contained():
    def provider():
        raise ConnectionError("feed down")

    scheduler = keyword_scheduler(provider)

    assert asyncio.run(scheduler.refresh()) is None
    assert scheduler.runs == []


def test_snooze_skips_refresh_until_deadline():
    clock = Clock()
    scheduler = keyword_scheduler(get_sample_items, clock=clock)

    deadline = scheduler.snooze(30)
    assert deadline == clock.now + timedelta(minutes=30)
    assert asyncio.run(scheduler.refresh()) is None

    clock.now += timedelta(minutes=31)
    assert not scheduler.is_snoozed
    assert asyncio.run(scheduler.refresh()) is not None


def test_forced_refresh_ignores_snooze():
    scheduler = keyword_scheduler(get_sample_items, clock=Clock())
    scheduler.snooze(10)

    assert asyncio.run(scheduler.refresh(force=True)) is not None


def test_snooze_zero_cancels():
    scheduler = keyword_scheduler(get_sample_items, clock=Clock())
    scheduler.snooze(10)

    assert scheduler.snooze(0) is None
    assert not scheduler.is_snoozed


def test_location_change_applies_to_next_refresh():
    scheduler = keyword_scheduler(get_sample_items)
    scheduler.set_location("נהריה")

    run = asyncio.run(scheduler.refresh())

    assert [a.location for a in run.relevant] == ["נהריה"]


def test_load_feed_file(tmp_path):
    path = tmp_path / "feed.json"
    path.write_text(json.dumps([
        {
            "title": "אזעקה בשדרות",
            "description": "צבע אדום",
            "link": "https://www.ynet.co.il/news/1",
            "pubDate": "2024-05-01T10:00:00Z",
            "guid": "1",
        },
        "not an object",
    ], ensure_ascii=False), encoding="utf-8")

    items = load_feed_file(path)

    assert len(items) == 1
    assert items[0].published_at.year == 2024
    assert items[0].link.endswith("/news/1")


def test_coordinates_set_nearest_city():
    scheduler = keyword_scheduler(get_sample_items)

    assert scheduler.set_coordinates(33.0, 35.1) == "נהריה"
    run = asyncio.run(scheduler.refresh())

    assert scheduler.user_location == "נהריה"
    assert [a.location for a in run.relevant] == ["נהריה"]


def test_load_feed_file_with_rfc822_dates(tmp_path):
    path = tmp_path / "feed.json"
    path.write_text(json.dumps([
        {
            "title": "אזעקה בשדרות",
            "link": "https://www.ynet.co.il/news/1",
            "pubDate": "Wed, 01 May 2024 10:00:00 GMT",
        },
    ], ensure_ascii=False), encoding="utf-8")

    items = load_feed_file(path)

    assert len(items) == 1
    assert items[0].published_at.hour == 10
