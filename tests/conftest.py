from collections.abc import Callable
from typing import Any

import pytest

from newsfeed.config import Settings
from newsfeed.models import Article, Intent, Success, UpstreamOutcome


def make_article(url: str | None, published_at: str | None, **extra: Any) -> dict:
    payload = {
        "source": {"id": None, "name": extra.pop("source", "Example Wire")},
        "author": None,
        "title": extra.pop("title", f"Headline for {url}"),
        "description": "Summary.",
        "url": url,
        "urlToImage": None,
        "publishedAt": published_at,
        "content": None,
    }
    payload.update(extra)
    return payload


def success(*articles: dict, total: int | None = None) -> Success:
    parsed = tuple(Article.model_validate(item) for item in articles)
    return Success(
        articles=parsed, total_results=len(parsed) if total is None else total
    )


class FakeUpstream:
    """Records calls and answers them from a ``(intent, params) -> outcome`` callable."""

    def __init__(
        self, respond: Callable[[Intent, dict[str, Any]], UpstreamOutcome]
    ) -> None:
        self.respond = respond
        self.calls: list[tuple[Intent, dict[str, Any], float | None]] = []

    async def fetch(
        self, intent: Intent, params: dict[str, Any], timeout: float | None = None
    ) -> UpstreamOutcome:
        self.calls.append((intent, dict(params), timeout))
        return self.respond(intent, dict(params))

    def countries(self, intent: Intent = Intent.HEADLINES) -> list[str]:
        return [
            params["country"]
            for call_intent, params, _ in self.calls
            if call_intent is intent
        ]


@pytest.fixture
def settings() -> Settings:
    return Settings(news_api_key="test-key")
