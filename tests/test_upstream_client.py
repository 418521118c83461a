import httpx
import pytest
import respx

from newsfeed.config import Settings
from newsfeed.errors import ConfigurationError
from newsfeed.models import Failure, FailureKind, Intent, RegionQuery, Success
from newsfeed.services.upstream import UpstreamClient

from conftest import make_article

HEADLINES_URL = "https://newsapi.org/v2/top-headlines"
SEARCH_URL = "https://newsapi.org/v2/everything"


@pytest.mark.asyncio
async def test_fetch_parses_articles_and_sends_api_key(settings: Settings) -> None:
    payload = {
        "status": "ok",
        "totalResults": 42,
        "articles": [
            make_article("https://news.example/1", "2024-05-20T12:34:00Z"),
            make_article(None, "2024-05-20T12:00:00Z"),
        ],
    }
    query = RegionQuery(region_code="gb", category="science", page_size_hint=5)

    async with httpx.AsyncClient() as client:
        upstream = UpstreamClient(settings, client)
        with respx.mock(assert_all_called=True) as mock:
            route = mock.get(
                HEADLINES_URL,
                params={
                    "apiKey": "test-key",
                    "country": "gb",
                    "category": "science",
                    "pageSize": "5",
                    "page": "1",
                },
            ).respond(200, json=payload)
            outcome = await upstream.fetch(Intent.HEADLINES, query.to_params())

    assert isinstance(outcome, Success)
    assert outcome.total_results == 42
    assert len(outcome.articles) == 2
    first = outcome.articles[0]
    assert first.url == "https://news.example/1"
    assert first.published_at == "2024-05-20T12:34:00Z"
    assert first.source is not None and first.source.name == "Example Wire"
    sent = route.calls.last.request.url.params
    assert "q" not in sent


@pytest.mark.asyncio
async def test_fetch_reports_permission_failure(settings: Settings) -> None:
    async with httpx.AsyncClient() as client:
        upstream = UpstreamClient(settings, client)
        with respx.mock(assert_all_called=True) as mock:
            mock.get(SEARCH_URL).respond(
                426,
                json={
                    "status": "error",
                    "code": "parameterInvalid",
                    "message": "Upgrade your plan",
                },
            )
            outcome = await upstream.fetch(Intent.SEARCH, {"q": "bitcoin"})

    assert outcome == Failure(status_code=426, message="Upgrade your plan")
    assert outcome.kind is FailureKind.PERMISSION


@pytest.mark.asyncio
async def test_fetch_reports_server_error_as_transient(settings: Settings) -> None:
    async with httpx.AsyncClient() as client:
        upstream = UpstreamClient(settings, client)
        with respx.mock(assert_all_called=True) as mock:
            mock.get(HEADLINES_URL).respond(503, text="unavailable")
            outcome = await upstream.fetch(Intent.HEADLINES, {"country": "us"})

    assert isinstance(outcome, Failure)
    assert outcome.status_code == 503
    assert outcome.kind is FailureKind.TRANSIENT


@pytest.mark.asyncio
async def test_fetch_reports_timeout_without_status(settings: Settings) -> None:
    async with httpx.AsyncClient() as client:
        upstream = UpstreamClient(settings, client)
        with respx.mock(assert_all_called=True) as mock:
            mock.get(HEADLINES_URL).mock(side_effect=httpx.ReadTimeout)
            outcome = await upstream.fetch(
                Intent.HEADLINES, {"country": "us"}, timeout=0.5
            )

    assert isinstance(outcome, Failure)
    assert outcome.status_code is None
    assert outcome.kind is FailureKind.TRANSIENT


@pytest.mark.asyncio
async def test_fetch_rejects_invalid_json(settings: Settings) -> None:
    async with httpx.AsyncClient() as client:
        upstream = UpstreamClient(settings, client)
        with respx.mock(assert_all_called=True) as mock:
            mock.get(HEADLINES_URL).respond(200, text="<html>oops</html>")
            outcome = await upstream.fetch(Intent.HEADLINES, {"country": "us"})

    assert isinstance(outcome, Failure)
    assert outcome.status_code == 502


@pytest.mark.asyncio
async def test_fetch_skips_malformed_articles(settings: Settings) -> None:
    payload = {
        "status": "ok",
        "articles": [
            make_article("https://news.example/ok", "2024-05-20T12:34:00Z"),
            make_article("https://news.example/bad", "2024-05-20T12:34:00Z", title={"x": 1}),
            "not-an-article",
        ],
    }
    async with httpx.AsyncClient() as client:
        upstream = UpstreamClient(settings, client)
        with respx.mock(assert_all_called=True) as mock:
            mock.get(HEADLINES_URL).respond(200, json=payload)
            outcome = await upstream.fetch(Intent.HEADLINES, {"country": "us"})

    assert isinstance(outcome, Success)
    assert [article.url for article in outcome.articles] == ["https://news.example/ok"]
    assert outcome.total_results == 1


@pytest.mark.asyncio
async def test_fetch_without_api_key_never_calls_upstream() -> None:
    settings = Settings(news_api_key=None)
    async with httpx.AsyncClient() as client:
        upstream = UpstreamClient(settings, client)
        with respx.mock(assert_all_called=False) as mock:
            route = mock.get(HEADLINES_URL).respond(200, json={"articles": []})
            with pytest.raises(ConfigurationError, match="NEWS_API_KEY"):
                await upstream.fetch(Intent.HEADLINES, {"country": "us"})

    assert not route.called
