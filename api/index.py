from __future__ import annotations

from fastapi import Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import FileResponse, ORJSONResponse
from mangum import Mangum

from newsfeed.config import Settings, get_settings
from newsfeed.errors import ConfigurationError, UpstreamError
from newsfeed.http_client import get_http_client, shutdown_http_client
from newsfeed.logging_setup import configure_logging
from newsfeed.models import AggregatedResult, Intent
from newsfeed.services import QueryService

configure_logging(get_settings().log_level)

ERROR_MESSAGES = {
    Intent.HEADLINES: "Failed to fetch top headlines",
    Intent.SEARCH: "Failed to fetch articles",
}

app = FastAPI(
    title="NewsFeed Aggregation API",
    version="0.1.0",
    description=(
        "Proxy over NewsAPI headlines and search with multi-region aggregation "
        "and plan-restriction fallback."
    ),
    default_response_class=ORJSONResponse,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(GZipMiddleware, minimum_size=1000)


async def get_query_service(
    settings: Settings = Depends(get_settings),
) -> QueryService:
    client = await get_http_client(settings)
    return QueryService.from_settings(settings, client)


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(
    _request: Request, exc: ConfigurationError
) -> ORJSONResponse:
    return ORJSONResponse(status_code=500, content={"error": str(exc)})


@app.exception_handler(UpstreamError)
async def upstream_error_handler(
    _request: Request, exc: UpstreamError
) -> ORJSONResponse:
    return ORJSONResponse(
        status_code=exc.status_code,
        content={"error": ERROR_MESSAGES[exc.intent]},
    )


@app.get("/api/health", tags=["system"])
async def healthcheck() -> dict[str, bool]:
    return {"ok": True}


@app.get(
    "/api/top-headlines",
    tags=["news"],
    response_model=AggregatedResult,
    response_model_by_alias=True,
)
async def top_headlines(
    country: str | None = Query(None, description="Region code, or 'all'"),
    category: str | None = Query(None),
    q: str | None = Query(None, description="Keyword filter"),
    page: str | None = Query(None),
    page_size: str | None = Query(None, alias="pageSize"),
    sort_by: str | None = Query(None, alias="sortBy"),
    service: QueryService = Depends(get_query_service),
):
    return await service.top_headlines(
        country=country,
        category=category,
        q=q,
        page=page,
        page_size=page_size,
        sort_by=sort_by,
    )


@app.get(
    "/api/everything",
    tags=["news"],
    response_model=AggregatedResult,
    response_model_by_alias=True,
)
async def everything(
    q: str | None = Query(None, description="Free-text search term"),
    sort_by: str | None = Query(None, alias="sortBy"),
    page: str | None = Query(None),
    page_size: str | None = Query(None, alias="pageSize"),
    language: str | None = Query(None),
    country: str | None = Query(
        None, description="Region used when search falls back to headlines"
    ),
    category: str | None = Query(
        None, description="Category used when search falls back to headlines"
    ),
    service: QueryService = Depends(get_query_service),
):
    return await service.everything(
        q=q,
        sort_by=sort_by,
        page=page,
        page_size=page_size,
        language=language,
        country=country,
        category=category,
    )


@app.get("/{full_path:path}", include_in_schema=False)
async def client_shell(full_path: str, settings: Settings = Depends(get_settings)):
    root = settings.public_dir.resolve()
    if full_path:
        candidate = (root / full_path).resolve()
        if candidate.is_relative_to(root) and candidate.is_file():
            return FileResponse(candidate)
    shell = root / "index.html"
    if shell.is_file():
        return FileResponse(shell)
    return ORJSONResponse(status_code=404, content={"error": "Not found"})


@app.on_event("shutdown")
async def on_shutdown() -> None:
    await shutdown_http_client()


handler = Mangum(app)
