from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import TextIO

from urlsluice.cli import DEFAULT_UUID_VERSION, parse_args
from urlsluice.config import SluiceSettings
from urlsluice.errors import (
    ExtractionCancelledError,
    ExtractionError,
    ReadFailureError,
    RedirectConfigError,
    ResourceLimitError,
)
from urlsluice.extraction.extractor import Extractor, stream_size
from urlsluice.extraction.reader import ChunkQueue, read_chunks
from urlsluice.extraction.types import ExtractionConfig
from urlsluice.logging_config import setup_logging
from urlsluice.output import print_redirects, print_results, print_wordlist
from urlsluice.redirect import RedirectDetector
from urlsluice.wordlist import generate_wordlist

logger = logging.getLogger("urlsluice")

_URL_SCHEMES = ("http://", "https://")


def collect_urls(text: str, seen: dict[str, None]) -> None:
    """Add every whitespace-separated http(s) field of ``text`` to ``seen``."""
    for field in text.split():
        if field.startswith(_URL_SCHEMES):
            seen.setdefault(field, None)


async def load_urls(
    path: str | Path,
    *,
    chunk_size: int,
    max_stream_bytes: int,
    timeout: float | None = None,
) -> list[str]:
    """Return the distinct http(s) URLs in ``path``, in order of first appearance.

    The file gets the same size limit and deadline as an extraction run and
    is read through the same line-aligned chunk reader.
    """
    seen: dict[str, None] = {}
    chunks: ChunkQueue = asyncio.Queue(maxsize=1)
    failed: BaseException | None = None

    with open(path, "rb") as f:
        size = stream_size(f)
        if size is not None and size > max_stream_bytes:
            raise ResourceLimitError("read", size=size, max_size=max_stream_bytes)

        try:
            async with asyncio.timeout(timeout):
                async with asyncio.TaskGroup() as tg:
                    tg.create_task(read_chunks(f, chunks, chunk_size=chunk_size, workers=1))
                    while True:
                        chunk = await chunks.get()
                        if chunk is None:
                            break
                        if chunk.error is not None:
                            # The reader stops after forwarding an error.
                            failed = chunk.error
                            break
                        collect_urls(chunk.data, seen)
        except TimeoutError as e:
            raise ExtractionCancelledError(
                "read", f"deadline of {timeout}s exceeded", cause=e
            ) from e

    if failed is not None:
        raise ReadFailureError("read", f"error reading input: {failed}", cause=failed) from failed
    return list(seen)


async def run(args: argparse.Namespace, settings: SluiceSettings, *, out: TextIO | None = None) -> int:
    out = out or sys.stdout

    # CLI overrides
    timeout = args.timeout if args.timeout and args.timeout > 0 else settings.timeout_seconds
    workers = args.workers if args.workers and args.workers > 0 else settings.workers

    if args.detect_redirects or args.wordlist:
        urls = await load_urls(
            args.file,
            chunk_size=settings.chunk_bytes,
            max_stream_bytes=settings.max_stream_bytes,
            timeout=timeout,
        )
        logger.info("Read %d URLs from %s", len(urls), args.file)
        if args.detect_redirects:
            detector = RedirectDetector.from_config(args.redirect_config or settings.redirect_config)
            print_redirects(detector.scan_urls(urls), silent=args.silent, out=out)
        if args.wordlist:
            print_wordlist(generate_wordlist(urls), out=out)
        return 0

    cfg = ExtractionConfig(
        uuid_version=DEFAULT_UUID_VERSION if args.uuid is None else args.uuid,
        extract_emails=args.emails,
        extract_domains=args.domains,
        extract_ips=args.ips,
        extract_params=args.query_params,
    )
    extractor = Extractor(
        cfg,
        workers=workers,
        chunk_size=settings.chunk_bytes,
        max_stream_bytes=settings.max_stream_bytes,
    )

    with open(args.file, "rb") as f:
        results = await extractor.extract(f, timeout=timeout)

    print_results(results, silent=args.silent, out=out)
    return 0


async def _amain(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    try:
        settings = SluiceSettings.from_env()
        settings.validate()
    except ValueError as e:
        print(f"Error: invalid settings: {e}", file=sys.stderr)
        return 1
    setup_logging(level=args.log_level.upper(), json=settings.log_json)

    try:
        return await run(args, settings)
    except (ExtractionError, RedirectConfigError, OSError) as e:
        logger.debug("Run failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


def main() -> None:
    raise SystemExit(asyncio.run(_amain()))


if __name__ == "__main__":
    main()
