"""Wordlist generation from URL paths and query strings."""

from __future__ import annotations

import ipaddress
import logging
import re
from collections.abc import Iterable
from urllib.parse import parse_qs, unquote, urlsplit

logger = logging.getLogger(__name__)

_DELIMITERS = re.compile(r"[-_./]")
_UUID_RE = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE)
_EMAIL_RE = re.compile(r"^[\w.\-]+@[\w.\-]+\.\w+$")

MIN_TOKEN_LEN = 3
MAX_TOKEN_LEN = 50


def tokenize(value: str) -> list[str]:
    return [t for t in _DELIMITERS.split(value) if t]


def _is_ip(token: str) -> bool:
    try:
        ipaddress.ip_address(token)
    except ValueError:
        return False
    return True


def is_useful_token(token: str) -> bool:
    token = token.strip()
    if len(token) < MIN_TOKEN_LEN or len(token) > MAX_TOKEN_LEN:
        return False
    if _UUID_RE.match(token) or _EMAIL_RE.match(token):
        return False
    if _is_ip(token):
        return False
    return not token.isdigit()


def extract_tokens_from_url(url: str) -> list[str]:
    """Split a URL's path segments, query keys and query values into tokens.

    Raises:
        ValueError: the URL cannot be parsed (e.g. ``://host`` with no scheme).
    """
    if url.startswith(":"):
        raise ValueError(f"missing protocol scheme: {url!r}")
    parts = urlsplit(url)

    tokens: list[str] = []
    for segment in unquote(parts.path).split("/"):
        if segment:
            tokens.extend(tokenize(segment))
    for key, values in parse_qs(parts.query, keep_blank_values=True).items():
        tokens.extend(tokenize(key))
        for v in values:
            tokens.extend(tokenize(v))
    return tokens


def generate_wordlist(urls: Iterable[str]) -> list[str]:
    words: set[str] = set()
    for url in urls:
        try:
            tokens = extract_tokens_from_url(url)
        except ValueError as e:
            logger.debug("Skipping URL for wordlist: %s", e)
            continue
        words.update(t.lower() for t in tokens if is_useful_token(t))
    return sorted(words)
