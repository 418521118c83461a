from __future__ import annotations

from dataclasses import dataclass, field

import httpx

from ..config import Settings
from ..errors import ConfigurationError
from ..models.news import AggregatedResult
from ..models.upstream import Intent, RegionQuery
from .aggregation import ALL_REGIONS, AggregationEngine
from .fallback import FallbackRouter
from .upstream import UpstreamClient

ALL_REGIONS_SENTINEL = "all"
DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100
DEFAULT_SEARCH_TERM = "news"
DEFAULT_SORT_BY = "publishedAt"
DEFAULT_LANGUAGE = "en"


@dataclass(slots=True)
class QueryService:
    """Entry point for the public API.

    Normalizes raw query-string values, refuses to run without an API key
    and dispatches either to a single upstream call or to the aggregation
    engine. Search failures go through the fallback router.
    """

    settings: Settings
    upstream: UpstreamClient
    engine: AggregationEngine = field(init=False)
    router: FallbackRouter = field(init=False)

    def __post_init__(self) -> None:
        self.engine = AggregationEngine(
            upstream=self.upstream, timeout=self.settings.aggregate_timeout
        )
        self.router = FallbackRouter()

    @classmethod
    def from_settings(
        cls, settings: Settings, client: httpx.AsyncClient | None = None
    ) -> QueryService:
        return cls(settings=settings, upstream=UpstreamClient(settings, client))

    async def top_headlines(
        self,
        country: str | None = None,
        category: str | None = None,
        q: str | None = None,
        page: str | int | None = None,
        page_size: str | int | None = None,
        sort_by: str | None = None,
    ) -> AggregatedResult:
        # sort_by is accepted for client compatibility; the headline endpoint
        # has no ordering parameter.
        self._ensure_configured()
        return await self._browse_headlines(
            region=(_blank_to_none(country) or self.settings.default_country).lower(),
            category=_blank_to_none(category),
            term=_blank_to_none(q),
            page=_coerce_positive_int(page, DEFAULT_PAGE),
            page_size=_coerce_page_size(page_size),
        )

    async def everything(
        self,
        q: str | None = None,
        sort_by: str | None = None,
        page: str | int | None = None,
        page_size: str | int | None = None,
        language: str | None = None,
        country: str | None = None,
        category: str | None = None,
    ) -> AggregatedResult:
        self._ensure_configured()
        term = _blank_to_none(q)
        page_number = _coerce_positive_int(page, DEFAULT_PAGE)
        size = _coerce_page_size(page_size)
        params = {
            "q": term or DEFAULT_SEARCH_TERM,
            "sortBy": _blank_to_none(sort_by) or DEFAULT_SORT_BY,
            "page": page_number,
            "pageSize": size,
            "language": _blank_to_none(language) or DEFAULT_LANGUAGE,
        }
        outcome = await self.upstream.fetch(
            Intent.SEARCH, params, timeout=self.settings.http_timeout
        )

        region = (_blank_to_none(country) or ALL_REGIONS_SENTINEL).lower()

        async def replacement() -> AggregatedResult:
            return await self._browse_headlines(
                region=region,
                category=_blank_to_none(category),
                term=term,
                page=page_number,
                page_size=size,
            )

        return await self.router.resolve(Intent.SEARCH, outcome, replacement)

    async def _browse_headlines(
        self,
        region: str,
        category: str | None,
        term: str | None,
        page: int,
        page_size: int,
    ) -> AggregatedResult:
        if region == ALL_REGIONS_SENTINEL:
            return await self.engine.aggregate(
                ALL_REGIONS,
                category=category,
                term=term,
                page=page,
                page_size=page_size,
            )

        query = RegionQuery(
            region_code=region,
            category=category,
            term=term,
            page_size_hint=page_size,
            page=page,
        )
        outcome = await self.upstream.fetch(
            Intent.HEADLINES, query.to_params(), timeout=self.settings.http_timeout
        )

        return await self.router.resolve(Intent.HEADLINES, outcome)

    def _ensure_configured(self) -> None:
        if not self.settings.news_api_key:
            raise ConfigurationError("NEWS_API_KEY")


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _coerce_positive_int(value: str | int | None, default: int) -> int:
    if value is None or value == "":
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number >= 1 else default


def _coerce_page_size(value: str | int | None) -> int:
    return min(_coerce_positive_int(value, DEFAULT_PAGE_SIZE), MAX_PAGE_SIZE)
