from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ArticleSource(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str | None = Field(default=None, description="Upstream source identifier")
    name: str | None = Field(default=None, description="Publisher name")


class Article(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    source: ArticleSource | None = Field(default=None)
    author: str | None = Field(default=None)
    title: str | None = Field(default=None, description="Article headline")
    description: str | None = Field(default=None, description="Short teaser or dek")
    url: str | None = Field(default=None, description="Canonical article URL")
    url_to_image: str | None = Field(default=None, alias="urlToImage")
    published_at: str | None = Field(
        default=None,
        alias="publishedAt",
        description="Publication timestamp exactly as reported upstream",
    )
    content: str | None = Field(default=None)


class AggregatedResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: Literal["ok"] = "ok"
    total_results: int = Field(
        default=0,
        ge=0,
        alias="totalResults",
        description="Result count before pagination",
    )
    articles: list[Article] = Field(default_factory=list)
