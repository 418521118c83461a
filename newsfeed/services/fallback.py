from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Union

from ..errors import UpstreamError
from ..models.news import AggregatedResult
from ..models.upstream import Failure, FailureKind, Intent, UpstreamOutcome

logger = logging.getLogger(__name__)

DEFAULT_FAILURE_STATUS = 500


@dataclass(frozen=True, slots=True)
class UseResult:
    result: AggregatedResult


@dataclass(frozen=True, slots=True)
class Retry:
    via: Intent = Intent.HEADLINES


@dataclass(frozen=True, slots=True)
class Propagate:
    status_code: int
    message: str = ""


Decision = Union[UseResult, Retry, Propagate]
Replacement = Callable[[], Awaitable[AggregatedResult]]


@dataclass(slots=True)
class FallbackRouter:
    """Downgrade plan-restricted searches to the headline strategy.

    Some upstream subscription tiers refuse full-text search with 401, 403
    or 426 but always allow headline browsing. For a search intent those
    statuses trigger a retry through headlines; everything else passes
    through unchanged.
    """

    def route(self, intent: Intent, outcome: UpstreamOutcome) -> Decision:
        if not isinstance(outcome, Failure):
            return UseResult(
                AggregatedResult(
                    total_results=outcome.total_results,
                    articles=list(outcome.articles),
                )
            )
        if intent is Intent.SEARCH and outcome.kind is FailureKind.PERMISSION:
            return Retry(via=Intent.HEADLINES)
        return _propagate(outcome)

    async def resolve(
        self,
        intent: Intent,
        outcome: UpstreamOutcome,
        replacement: Replacement | None = None,
    ) -> AggregatedResult:
        decision = self.route(intent, outcome)
        if isinstance(decision, UseResult):
            return decision.result
        if isinstance(decision, Retry) and replacement is None:
            decision = _propagate(outcome)
        if isinstance(decision, Propagate):
            logger.warning(
                "Upstream %s failed with %s: %s",
                intent.value,
                decision.status_code,
                decision.message,
            )
            raise UpstreamError(decision.status_code, decision.message, intent)

        logger.info(
            "Upstream %s refused (%s), retrying via %s",
            intent.value,
            outcome.status_code if isinstance(outcome, Failure) else None,
            decision.via.value,
        )
        try:
            return await replacement()
        except UpstreamError as exc:
            raise UpstreamError(
                exc.status_code or DEFAULT_FAILURE_STATUS, exc.detail, intent
            ) from exc


def _propagate(failure: Failure) -> Propagate:
    return Propagate(
        status_code=failure.status_code or DEFAULT_FAILURE_STATUS,
        message=failure.message,
    )
