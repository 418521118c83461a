from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import httpx
from pydantic import ValidationError

from ..config import Settings
from ..errors import ConfigurationError
from ..http_client import get_http_client
from ..models.news import Article
from ..models.upstream import Failure, Intent, Success, UpstreamOutcome

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class UpstreamClient:
    """Single GET against NewsAPI, reported as a ``Success`` or ``Failure``.

    HTTP, transport and payload problems are returned as ``Failure`` so that
    callers can branch on the outcome; only a missing API key raises.
    """

    settings: Settings
    client: httpx.AsyncClient | None = None

    async def fetch(
        self,
        intent: Intent,
        params: Mapping[str, Any],
        timeout: float | None = None,
    ) -> UpstreamOutcome:
        api_key = self.settings.news_api_key
        if not api_key:
            raise ConfigurationError("NEWS_API_KEY")

        client = self.client or await get_http_client(self.settings)
        url = f"{self.settings.news_api_base_url.rstrip('/')}/{intent.value}"
        query = {"apiKey": api_key, **params}
        try:
            response = await client.get(
                url, params=query, timeout=timeout or self.settings.http_timeout
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as exc:
            return Failure(
                status_code=exc.response.status_code,
                message=_error_message(exc.response),
            )
        except httpx.HTTPError as exc:
            return Failure(status_code=None, message=str(exc) or type(exc).__name__)
        except ValueError as exc:
            return Failure(status_code=502, message=f"Invalid JSON from upstream: {exc}")

        if not isinstance(payload, dict):
            return Failure(status_code=502, message="Unexpected upstream payload")
        if payload.get("status") == "error":
            return Failure(
                status_code=502,
                message=str(payload.get("message") or payload.get("code") or "error"),
            )

        articles = _parse_articles(payload.get("articles"))
        total = payload.get("totalResults")
        if not isinstance(total, int) or total < 0:
            total = len(articles)
        return Success(articles=tuple(articles), total_results=total)


def _parse_articles(raw: Any) -> list[Article]:
    if not isinstance(raw, list):
        return []
    articles: list[Article] = []
    for entry in raw:
        if not isinstance(entry, dict):
            continue
        try:
            articles.append(Article.model_validate(entry))
        except ValidationError as exc:
            logger.debug("Skipping malformed article %r: %s", entry.get("url"), exc)
    return articles


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.reason_phrase or f"HTTP {response.status_code}"
    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])
    return response.reason_phrase or f"HTTP {response.status_code}"
