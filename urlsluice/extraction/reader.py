"""Chunk reader: turns a binary stream into line-aligned text chunks.

Chunks are cut at the last newline of each block read; the bytes after it
are carried into the next chunk. A line is therefore never split across two
chunks, and neither is any match on it. A line longer than ``chunk_size``
keeps growing the carried buffer until its newline (or EOF) shows up.
"""

from __future__ import annotations

import asyncio
import logging
from typing import BinaryIO

from urlsluice.errors import ExtractionCancelledError
from urlsluice.extraction.types import Chunk

logger = logging.getLogger(__name__)

# One ``None`` per worker marks the end of the stream.
ChunkQueue = asyncio.Queue[Chunk | None]


def decode_chunk(data: bytes) -> str:
    # Bad bytes become U+FFFD and NULs are kept; either one ends a match.
    # Cuts happen at b"\n", so no valid UTF-8 sequence is ever split.
    return data.decode("utf-8", errors="replace")


async def read_chunks(
    reader: BinaryIO,
    out: ChunkQueue,
    *,
    chunk_size: int,
    workers: int,
    cancel: asyncio.Event | None = None,
) -> None:
    """Read ``reader`` to EOF, pushing chunks onto ``out`` in stream order.

    A failing read is forwarded as a chunk carrying the exception and ends
    reading. A set ``cancel`` event is forwarded the same way. Blocking puts
    on a full queue are abandoned when the enclosing task is cancelled.
    """
    pending = bytearray()
    chunks = 0
    total = 0

    while True:
        if cancel is not None and cancel.is_set():
            await out.put(Chunk(data="", error=ExtractionCancelledError("read", "extraction cancelled")))
            return

        try:
            block = await asyncio.to_thread(reader.read, chunk_size)
        except Exception as e:
            logger.debug("Read failed after %d bytes: %s", total, e)
            await out.put(Chunk(data="", error=e))
            return

        if not block:
            break
        total += len(block)

        cut = block.rfind(b"\n")
        if cut < 0:
            pending.extend(block)
            continue

        data = bytes(pending) + block[: cut + 1]
        pending = bytearray(block[cut + 1 :])
        await out.put(Chunk(data=decode_chunk(data)))
        chunks += 1

    if pending:
        await out.put(Chunk(data=decode_chunk(bytes(pending))))
        chunks += 1

    logger.debug("Reader done: %d bytes in %d chunks", total, chunks)
    for _ in range(workers):
        await out.put(None)
