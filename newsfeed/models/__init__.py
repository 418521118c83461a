from .news import AggregatedResult, Article, ArticleSource
from .upstream import (
    PERMISSION_STATUSES,
    Failure,
    FailureKind,
    Intent,
    RegionQuery,
    Success,
    UpstreamOutcome,
)

__all__ = [
    "AggregatedResult",
    "Article",
    "ArticleSource",
    "Failure",
    "FailureKind",
    "Intent",
    "PERMISSION_STATUSES",
    "RegionQuery",
    "Success",
    "UpstreamOutcome",
]
