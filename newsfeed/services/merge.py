from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timezone

from dateutil import parser as date_parser

from ..models.news import Article

OLDEST = float("-inf")


def merge_articles(batches: Iterable[Iterable[Article]]) -> list[Article]:
    """Flatten ``batches`` into one feed, newest first.

    Articles without a URL are dropped. When a URL repeats, the copy from the
    earliest batch (and earliest position within it) is kept. The sort is
    stable, so articles with equal timestamps keep their first-seen order.
    """
    seen: set[str] = set()
    unique: list[Article] = []
    for batch in batches:
        for article in batch:
            if not article.url or article.url in seen:
                continue
            seen.add(article.url)
            unique.append(article)
    return sorted(unique, key=published_timestamp, reverse=True)


def published_timestamp(article: Article) -> float:
    parsed = _parse_datetime(article.published_at)
    if parsed is None:
        return OLDEST
    try:
        return parsed.timestamp()
    except (OverflowError, ValueError, OSError):
        return OLDEST


def _parse_datetime(value: str | None) -> datetime | None:
    if not value:
        return None
    # shifting to UTC can leave the datetime range, e.g. year 9999 at -05:00
    try:
        parsed = date_parser.parse(value)
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)
    except (ValueError, TypeError, OverflowError):
        return None
