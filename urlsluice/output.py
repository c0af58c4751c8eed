from __future__ import annotations

import sys
from collections.abc import Iterable
from typing import TextIO

from urlsluice.extraction.types import ExtractionResults
from urlsluice.redirect import RedirectResult

# (label, attribute) in print order
_SECTIONS: tuple[tuple[str, str], ...] = (
    ("UUIDs", "uuids"),
    ("Email Addresses", "emails"),
    ("Domains", "domains"),
    ("IP Addresses", "ips"),
    ("Query Parameters", "params"),
)


def print_section(label: str, values: Iterable[str], *, silent: bool, out: TextIO | None = None) -> None:
    """Print ``values`` sorted, one per line, under an ``Extracted <label>:`` header.

    Nothing at all is printed for an empty section. ``silent`` drops the header.
    """
    out = out or sys.stdout
    items = sorted(values)
    if not items:
        return
    if not silent:
        out.write(f"\nExtracted {label}:\n")
    for v in items:
        out.write(f"{v}\n")


def print_results(results: ExtractionResults, *, silent: bool, out: TextIO | None = None) -> None:
    for label, attr in _SECTIONS:
        print_section(label, getattr(results, attr), silent=silent, out=out)


def print_redirects(results: Iterable[RedirectResult], *, silent: bool, out: TextIO | None = None) -> None:
    out = out or sys.stdout
    vulnerable = [r for r in results if r.is_vulnerable]
    if not vulnerable:
        return
    if not silent:
        out.write("\nPotential Open Redirects:\n")
    for r in vulnerable:
        out.write(f"{r.url}\n")
        if silent:
            continue
        for p in r.matched_params:
            known = "true" if p.is_known else "false"
            out.write(f"  Parameter: {p.name} = {p.value} (Known: {known})\n")


def print_wordlist(words: Iterable[str], *, out: TextIO | None = None) -> None:
    out = out or sys.stdout
    for w in words:
        out.write(f"{w}\n")
