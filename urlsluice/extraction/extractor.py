"""Extraction coordinator.

``Extractor.extract`` runs one fan-out/fan-in pass over an input stream:

    reader task -> chunk queue -> N worker tasks -> partial queue -> merger

All stages live in one ``asyncio.TaskGroup``. The first stage to fail
records its exception in a ``FirstError`` slot and the group cancels every
other stage, including any ``get``/``put`` blocked on a queue. ``extract``
only returns (or raises) once every task has finished.
"""

from __future__ import annotations

import asyncio
import io
import logging
import os
import stat
import time
from collections.abc import Awaitable, Callable
from functools import partial
from typing import BinaryIO

from urlsluice.errors import (
    ExtractionCancelledError,
    ExtractionError,
    InvalidConfigurationError,
    InvalidInputError,
    ReadFailureError,
    ResourceLimitError,
)
from urlsluice.extraction.merger import merge_partials
from urlsluice.extraction.reader import ChunkQueue, read_chunks
from urlsluice.extraction.types import ExtractionConfig, ExtractionResults
from urlsluice.extraction.workers import FirstError, PartialQueue, run_worker
from urlsluice.patterns import PatternTable

logger = logging.getLogger(__name__)

MAX_STREAM_BYTES = 100 * 1024 * 1024
DEFAULT_CHUNK_SIZE = 1 * 1024 * 1024
DEFAULT_WORKERS = 4


def stream_size(reader: BinaryIO) -> int | None:
    """Return the number of bytes left in ``reader`` if it can tell without reading.

    Regular files are sized with ``fstat``; other seekable streams by seeking
    to the end and back. Pipes and sockets report ``None``.
    """
    try:
        fd = reader.fileno()
    except (AttributeError, OSError, ValueError):
        fd = None

    if fd is not None:
        try:
            st = os.fstat(fd)
        except OSError as e:
            raise ReadFailureError("extract", f"error getting file info: {e}", cause=e) from e
        if stat.S_ISREG(st.st_mode):
            try:
                return max(st.st_size - reader.tell(), 0)
            except (OSError, ValueError):
                return st.st_size
        return None

    seekable = getattr(reader, "seekable", None)
    try:
        if seekable is None or not seekable():
            return None
        pos = reader.tell()
        end = reader.seek(0, io.SEEK_END)
        reader.seek(pos)
    except (OSError, ValueError) as e:
        raise ReadFailureError("extract", f"error getting stream size: {e}", cause=e) from e
    return max(end - pos, 0)


async def _wait_for_cancel(cancel: asyncio.Event) -> None:
    await cancel.wait()
    raise ExtractionCancelledError("extract", "extraction cancelled")


class Extractor:
    def __init__(
        self,
        cfg: ExtractionConfig,
        *,
        patterns: PatternTable | None = None,
        workers: int = DEFAULT_WORKERS,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        max_stream_bytes: int = MAX_STREAM_BYTES,
    ) -> None:
        cfg.validate()
        if workers < 1:
            raise InvalidConfigurationError("new", f"workers must be >= 1 (got {workers})")
        if chunk_size < 1:
            raise InvalidConfigurationError("new", f"chunk_size must be >= 1 (got {chunk_size})")
        if max_stream_bytes < 0:
            raise InvalidConfigurationError(
                "new", f"max_stream_bytes must be >= 0 (got {max_stream_bytes})"
            )

        self._cfg = cfg
        self._patterns = patterns or PatternTable.default()
        self._workers = workers
        self._chunk_size = chunk_size
        self._max_stream_bytes = max_stream_bytes

    @property
    def config(self) -> ExtractionConfig:
        return self._cfg

    async def extract(
        self,
        reader: BinaryIO | None,
        *,
        cancel: asyncio.Event | None = None,
        timeout: float | None = None,
    ) -> ExtractionResults:
        """Extract every active pattern class from ``reader``.

        Args:
            reader: Binary stream to read until EOF.
            cancel: Optional event; setting it aborts the extraction.
            timeout: Optional deadline in seconds for the whole call.

        Returns:
            The deduplicated matches per category.

        Raises:
            ExtractionCancelledError: ``cancel`` was set or the deadline expired.
            InvalidInputError: ``reader`` is None.
            ResourceLimitError: the stream is larger than ``max_stream_bytes``.
            ReadFailureError: reading the stream failed.
        """
        if (cancel is not None and cancel.is_set()) or (timeout is not None and timeout <= 0):
            raise ExtractionCancelledError("extract", "extraction cancelled before start")

        if reader is None:
            raise InvalidInputError("extract", "no input stream")

        size = stream_size(reader)
        if size is not None and size > self._max_stream_bytes:
            raise ResourceLimitError("extract", size=size, max_size=self._max_stream_bytes)

        failure = FirstError()
        chunks: ChunkQueue = asyncio.Queue(maxsize=self._workers)
        partials: PartialQueue = asyncio.Queue(maxsize=self._workers)

        async def guarded(stage: Callable[[], Awaitable[None]]) -> None:
            try:
                await stage()
            except Exception as e:
                failure.record(e)
                raise

        logger.debug(
            "Extraction start: workers=%d chunk_size=%d size=%s",
            self._workers,
            self._chunk_size,
            size if size is not None else "unknown",
        )
        t0 = time.perf_counter()

        try:
            async with asyncio.timeout(timeout):
                async with asyncio.TaskGroup() as tg:
                    tg.create_task(
                        guarded(
                            partial(
                                read_chunks,
                                reader,
                                chunks,
                                chunk_size=self._chunk_size,
                                workers=self._workers,
                                cancel=cancel,
                            )
                        )
                    )
                    for i in range(self._workers):
                        tg.create_task(
                            guarded(
                                partial(
                                    run_worker,
                                    i,
                                    chunks,
                                    partials,
                                    cfg=self._cfg,
                                    patterns=self._patterns,
                                )
                            )
                        )
                    watcher = (
                        tg.create_task(guarded(partial(_wait_for_cancel, cancel)))
                        if cancel is not None
                        else None
                    )

                    results = await merge_partials(
                        partials, workers=self._workers, failure=failure
                    )

                    if watcher is not None:
                        watcher.cancel()
        except TimeoutError as e:
            logger.warning("Extraction deadline of %.3fs exceeded", timeout)
            raise ExtractionCancelledError(
                "extract", f"deadline of {timeout}s exceeded", cause=e
            ) from e
        except ExceptionGroup as eg:
            err = failure.error or eg.exceptions[0]
            logger.warning("Extraction failed: %s", err)
            if isinstance(err, ExtractionError):
                raise err from err.cause
            raise ReadFailureError("extract", str(err), cause=err) from err

        logger.debug(
            "Extraction done in %.3fs: uuids=%d emails=%d domains=%d ips=%d params=%d",
            time.perf_counter() - t0,
            len(results.uuids),
            len(results.emails),
            len(results.domains),
            len(results.ips),
            len(results.params),
        )
        return results
