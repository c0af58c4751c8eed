"""Exceptions raised by the extraction engine and its collaborators.

Every extraction failure is an ``ExtractionError`` tagged with the operation
that failed and, where there is one, the underlying cause. Callers that only
care about "did extraction work" can catch the base class; the subclasses
map one-to-one onto the failure categories of ``Extractor.extract``.
"""

from __future__ import annotations


class ExtractionError(Exception):
    """Base exception for all extraction failures."""

    def __init__(self, op: str, message: str, *, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.op = op
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        return f"{self.op}: {self.message}"


class InvalidInputError(ExtractionError):
    """The input stream is missing."""


class InvalidConfigurationError(ExtractionError):
    """The extraction configuration is out of range."""


class ResourceLimitError(ExtractionError):
    """The input stream is larger than the configured maximum."""

    def __init__(self, op: str, *, size: int, max_size: int) -> None:
        super().__init__(
            op,
            f"stream too large: {size} bytes exceeds maximum of {max_size} bytes",
        )
        self.size = size
        self.max_size = max_size


class ReadFailureError(ExtractionError):
    """Reading from the input stream failed."""


class ExtractionCancelledError(ExtractionError):
    """Extraction was cancelled or its deadline expired."""


class RedirectConfigError(Exception):
    """The redirect parameter configuration file could not be parsed."""

    def __init__(self, path: str, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path
