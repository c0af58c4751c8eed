from __future__ import annotations

import logging

from urlsluice.extraction.types import ExtractionResults
from urlsluice.extraction.workers import FirstError, PartialQueue

logger = logging.getLogger(__name__)


async def merge_partials(
    partials: PartialQueue,
    *,
    workers: int,
    failure: FirstError | None = None,
) -> ExtractionResults:
    """Fold partial results into one set per category until every worker is done.

    Set union is commutative and idempotent, so the order in which workers
    finish their chunks has no effect on the outcome. Once ``failure`` holds
    an error nothing more is folded, even if partials are still queued.
    """
    final = ExtractionResults()
    remaining = workers
    merged = 0
    while remaining:
        part = await partials.get()
        if failure is not None and failure.error is not None:
            logger.debug("Merge stopped after %d partial results: pipeline failed", merged)
            return final
        if part is None:
            remaining -= 1
            continue
        final.merge(part)
        merged += 1

    logger.debug("Merged %d partial results", merged)
    return final
