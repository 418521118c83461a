from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass

from ..errors import ConfigurationError
from ..models.news import AggregatedResult, Article
from ..models.upstream import (
    Failure,
    Intent,
    RegionQuery,
    Success,
)
from .merge import merge_articles
from .pagination import paginate
from .upstream import UpstreamClient

logger = logging.getLogger(__name__)

ALL_REGIONS: tuple[str, ...] = (
    "us",
    "gb",
    "in",
    "au",
    "ca",
    "de",
    "fr",
    "it",
    "jp",
    "ru",
    "sa",
    "za",
)
REFERENCE_PAGE_SIZE = 20
MIN_REGION_PAGE_SIZE = 5


def region_page_size(region_count: int) -> int:
    return max(MIN_REGION_PAGE_SIZE, REFERENCE_PAGE_SIZE // max(region_count, 1))


@dataclass(slots=True)
class AggregationEngine:
    upstream: UpstreamClient
    timeout: float = 15.0

    async def aggregate(
        self,
        regions: Sequence[str],
        category: str | None = None,
        term: str | None = None,
        page: int = 1,
        page_size: int = 20,
    ) -> AggregatedResult:
        codes = list(dict.fromkeys(regions))
        hint = region_page_size(len(codes))
        queries = [
            RegionQuery(
                region_code=code, category=category, term=term, page_size_hint=hint
            )
            for code in codes
        ]
        tasks = [
            self.upstream.fetch(Intent.HEADLINES, query.to_params(), timeout=self.timeout)
            for query in queries
        ]
        results = await asyncio.gather(*tasks, return_exceptions=True)

        batches: list[tuple[Article, ...]] = []
        for query, result in zip(queries, results, strict=True):
            if isinstance(result, ConfigurationError):
                raise result
            if isinstance(result, BaseException) and not isinstance(result, Exception):
                raise result
            if isinstance(result, Success):
                batches.append(result.articles)
                continue
            if isinstance(result, Failure):
                reason = f"{result.status_code or 'no status'} {result.message}"
            else:
                reason = repr(result)
            logger.warning(
                "Failed to fetch headlines for region %s: %s", query.region_code, reason
            )
            batches.append(())

        merged = merge_articles(batches)
        window = paginate(merged, page, page_size)
        return AggregatedResult(total_results=window.total_results, articles=window.items)
