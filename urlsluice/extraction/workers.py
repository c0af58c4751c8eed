from __future__ import annotations

import asyncio
import logging

from urlsluice.errors import ExtractionError, ReadFailureError
from urlsluice.extraction.reader import ChunkQueue
from urlsluice.extraction.types import ExtractionConfig, PartialResult
from urlsluice.patterns import (
    PatternTable,
    match_domains,
    match_emails,
    match_ipv4,
    match_query_params,
    match_uuids,
)

logger = logging.getLogger(__name__)

# One ``None`` per worker tells the merger that worker is finished.
PartialQueue = asyncio.Queue[PartialResult | None]


class FirstError:
    """Single-assignment slot for the first pipeline failure.

    ``record`` keeps the first exception it is given and ignores the rest, so
    whichever stage fails first decides what the caller sees.
    """

    def __init__(self) -> None:
        self._error: BaseException | None = None

    def record(self, exc: BaseException) -> bool:
        if self._error is not None:
            logger.debug("Dropping secondary pipeline error: %r", exc)
            return False
        self._error = exc
        return True

    @property
    def error(self) -> BaseException | None:
        return self._error


def process_chunk(data: str, *, cfg: ExtractionConfig, patterns: PatternTable) -> PartialResult:
    """Run every active matcher over each line of ``data``. Only LF ends a line."""
    res = PartialResult()
    for line in data.split("\n"):
        line = line.rstrip("\r")
        if not line:
            continue
        if cfg.uuid_version:
            res.uuids.update(match_uuids(patterns, line, cfg.uuid_version))
        if cfg.extract_emails:
            res.emails.update(match_emails(patterns, line))
        if cfg.extract_domains:
            res.domains.update(match_domains(patterns, line))
        if cfg.extract_ips:
            res.ips.update(match_ipv4(patterns, line))
        if cfg.extract_params:
            res.params.update(str(p) for p in match_query_params(patterns, line))
    return res


async def run_worker(
    worker_id: int,
    chunks: ChunkQueue,
    partials: PartialQueue,
    *,
    cfg: ExtractionConfig,
    patterns: PatternTable,
) -> None:
    processed = 0
    while True:
        chunk = await chunks.get()
        if chunk is None:
            logger.debug("Worker %d finished after %d chunks", worker_id, processed)
            await partials.put(None)
            return

        if chunk.error is not None:
            if isinstance(chunk.error, ExtractionError):
                raise chunk.error
            raise ReadFailureError(
                "read", f"error reading input: {chunk.error}", cause=chunk.error
            ) from chunk.error

        # Matching is CPU-bound; keep it off the event loop.
        res = await asyncio.to_thread(process_chunk, chunk.data, cfg=cfg, patterns=patterns)
        processed += 1
        await partials.put(res)
