"""Line-level pattern matchers.

Every matcher takes a single line of text and returns the matches found on
it, in order of appearance. Matchers never look across lines and never
mutate anything, so the same ``PatternTable`` can be shared by any number of
concurrent extractions.
"""

from __future__ import annotations

import ipaddress
import re
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

_UUID_TEMPLATE = r"[a-f0-9]{{8}}-[a-f0-9]{{4}}-{version}[a-f0-9]{{3}}-[89ab][a-f0-9]{{3}}-[a-f0-9]{{12}}"

UUID_VERSIONS: tuple[int, ...] = (1, 2, 3, 4, 5)


@dataclass(frozen=True)
class QueryParam:
    key: str
    value: str

    def __str__(self) -> str:
        return f"{self.key}={self.value}"


@dataclass(frozen=True)
class PatternTable:
    """Compiled regexes for every pattern class.

    Build one with ``PatternTable.default()`` and hand it to the extractor.
    The UUID table is a read-only mapping keyed by UUID version.
    """

    uuid: Mapping[int, re.Pattern[str]]
    email: re.Pattern[str]
    domain: re.Pattern[str]
    ipv4: re.Pattern[str]
    query_param: re.Pattern[str]

    @classmethod
    def default(cls) -> PatternTable:
        return cls(
            uuid=MappingProxyType(
                {v: re.compile(_UUID_TEMPLATE.format(version=v)) for v in UUID_VERSIONS}
            ),
            email=re.compile(r"[\w._%+-]+@[\w.-]+\.[a-zA-Z]{2,}", re.ASCII),
            domain=re.compile(r"https?://([a-zA-Z0-9.-]+)/?"),
            ipv4=re.compile(r"\b(?:\d{1,3}\.){3}\d{1,3}\b", re.ASCII),
            query_param=re.compile(r"[?&]([^&=]+)=([^&=]*)"),
        )


def match_uuids(table: PatternTable, line: str, version: int) -> list[str]:
    # Version 0 disables UUID extraction.
    regex = table.uuid.get(version)
    if regex is None:
        return []
    return regex.findall(line)


def match_emails(table: PatternTable, line: str) -> list[str]:
    return table.email.findall(line)


def match_domains(table: PatternTable, line: str) -> list[str]:
    hosts: list[str] = []
    for host in table.domain.findall(line):
        if host.startswith(".") or host.endswith("."):
            continue
        hosts.append(host)
    return hosts


def is_valid_ipv4(candidate: str) -> bool:
    try:
        ipaddress.IPv4Address(candidate)
    except ValueError:
        return False
    return True


def match_ipv4(table: PatternTable, line: str) -> list[str]:
    """Return octet-shaped substrings that are also real IPv4 addresses.

    The regex only checks the dotted shape; ``999.0.0.1`` passes it and is
    dropped by the ``ipaddress`` check.
    """
    return [ip for ip in table.ipv4.findall(line) if is_valid_ipv4(ip)]


def match_query_params(table: PatternTable, line: str) -> list[QueryParam]:
    return [QueryParam(key=k, value=v) for k, v in table.query_param.findall(line)]
