from .aggregation import ALL_REGIONS, AggregationEngine
from .fallback import FallbackRouter, Propagate, Retry, UseResult
from .merge import merge_articles
from .pagination import Page, paginate
from .query import QueryService
from .upstream import UpstreamClient

__all__ = [
    "ALL_REGIONS",
    "AggregationEngine",
    "FallbackRouter",
    "Page",
    "Propagate",
    "QueryService",
    "Retry",
    "UpstreamClient",
    "UseResult",
    "merge_articles",
    "paginate",
]
