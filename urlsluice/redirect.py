"""Open-redirect detection for already-extracted URLs.

A query parameter is flagged when its value looks like a URL (``http://``,
``https://`` or protocol-relative ``//``) and either its name is a known
redirect parameter or the value is not a short/numeric string. Only the
query string is inspected; URLs embedded in the path are ignored.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import parse_qs, urlsplit

import yaml

from urlsluice.errors import RedirectConfigError

logger = logging.getLogger(__name__)

DEFAULT_REDIRECT_PARAMS: tuple[str, ...] = (
    "next",
    "url",
    "redirect",
    "return",
    "goto",
    "dest",
    "view",
)

_URL_PREFIXES = ("http://", "https://", "//")


@dataclass(frozen=True)
class MatchedParameter:
    name: str
    value: str
    is_known: bool


@dataclass
class RedirectResult:
    url: str
    is_vulnerable: bool = False
    matched_params: list[MatchedParameter] = field(default_factory=list)


def load_redirect_params(path: str | Path) -> list[str]:
    """Read ``redirect_params`` from a YAML file.

    A missing file or an empty list yields an empty result, which callers
    treat as "use the defaults".
    """
    p = Path(path)
    try:
        raw = p.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.info("Redirect config %s not found; using defaults", p)
        return []

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise RedirectConfigError(str(p), f"invalid YAML: {e}") from e

    if data is None:
        return []
    if not isinstance(data, dict):
        raise RedirectConfigError(str(p), "expected a mapping with a 'redirect_params' key")

    params = data.get("redirect_params") or []
    if not isinstance(params, list):
        raise RedirectConfigError(str(p), "'redirect_params' must be a list")
    return [str(v).strip() for v in params if str(v).strip()]


def is_url_like(value: str) -> bool:
    return value.startswith(_URL_PREFIXES)


def is_numeric_or_short(value: str) -> bool:
    # Anything under 4 chars is too short to be a URL.
    if len(value) < 4:
        return True
    return all("0" <= c <= "9" for c in value)


class RedirectDetector:
    def __init__(self, redirect_params: Iterable[str] | None = None) -> None:
        params = list(redirect_params or [])
        self._params = params or list(DEFAULT_REDIRECT_PARAMS)
        self._known = {p.lower() for p in self._params}

    @classmethod
    def from_config(cls, path: str | Path | None) -> RedirectDetector:
        if not path:
            return cls()
        return cls(load_redirect_params(path))

    @property
    def redirect_params(self) -> list[str]:
        return list(self._params)

    def is_known(self, name: str) -> bool:
        return name.lower() in self._known

    def scan_url(self, url: str) -> RedirectResult:
        result = RedirectResult(url=url)
        try:
            query = urlsplit(url).query
        except ValueError:
            logger.debug("Skipping unparsable URL: %s", url)
            return result

        for name, values in parse_qs(query, keep_blank_values=True).items():
            known = self.is_known(name)
            for value in values:
                if not is_url_like(value):
                    continue
                if known or not is_numeric_or_short(value):
                    result.is_vulnerable = True
                    result.matched_params.append(
                        MatchedParameter(name=name, value=value, is_known=known)
                    )
        return result

    def detect_redirect_params(self, url: str) -> bool:
        return self.scan_url(url).is_vulnerable

    def scan_urls(self, urls: Iterable[str]) -> list[RedirectResult]:
        return [self.scan_url(u) for u in urls]
