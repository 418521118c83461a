from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from .news import Article

PERMISSION_STATUSES = frozenset({401, 403, 426})


class Intent(str, Enum):
    """Upstream strategy; the value is the endpoint path."""

    HEADLINES = "top-headlines"
    SEARCH = "everything"


class FailureKind(str, Enum):
    TRANSIENT = "transient"
    PERMISSION = "permission"


@dataclass(slots=True)
class RegionQuery:
    region_code: str
    category: str | None = None
    term: str | None = None
    page_size_hint: int = 20
    page: int = 1

    def to_params(self) -> dict[str, Any]:
        params: dict[str, Any] = {
            "country": self.region_code,
            "page": self.page,
            "pageSize": self.page_size_hint,
        }
        if self.category:
            params["category"] = self.category
        if self.term:
            params["q"] = self.term
        return params


@dataclass(frozen=True, slots=True)
class Success:
    articles: tuple[Article, ...] = field(default_factory=tuple)
    total_results: int = 0


@dataclass(frozen=True, slots=True)
class Failure:
    status_code: int | None
    message: str

    @property
    def kind(self) -> FailureKind:
        if self.status_code in PERMISSION_STATUSES:
            return FailureKind.PERMISSION
        return FailureKind.TRANSIENT


UpstreamOutcome = Union[Success, Failure]
