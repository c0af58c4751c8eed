"""Unit tests for result rendering."""

from __future__ import annotations

import io

from urlsluice.extraction.types import ExtractionResults
from urlsluice.output import print_redirects, print_results, print_wordlist
from urlsluice.redirect import MatchedParameter, RedirectResult


def _render(fn, *args, **kwargs) -> str:
    buf = io.StringIO()
    fn(*args, out=buf, **kwargs)
    return buf.getvalue()


class TestPrintResults:
    def test_normal_output_sorted(self):
        res = ExtractionResults(emails={"test@example.com", "abc@example.com"})
        out = _render(print_results, res, silent=False)
        assert out == "\nExtracted Email Addresses:\nabc@example.com\ntest@example.com\n"

    def test_silent_output(self):
        res = ExtractionResults(emails={"test@example.com"})
        assert _render(print_results, res, silent=True) == "test@example.com\n"

    def test_empty_results(self):
        assert _render(print_results, ExtractionResults(), silent=False) == ""

    def test_section_order(self):
        res = ExtractionResults(
            uuids={"550e8400-e29b-41d4-a716-446655440000"},
            emails={"a@b.io"},
            domains={"b.io"},
            ips={"1.1.1.1"},
            params={"k=v"},
        )
        out = _render(print_results, res, silent=False)
        headers = [line for line in out.splitlines() if line.startswith("Extracted")]
        assert headers == [
            "Extracted UUIDs:",
            "Extracted Email Addresses:",
            "Extracted Domains:",
            "Extracted IP Addresses:",
            "Extracted Query Parameters:",
        ]


class TestPrintRedirects:
    def _results(self) -> list[RedirectResult]:
        return [
            RedirectResult(
                url="https://example.com/login?next=https://evil.com",
                is_vulnerable=True,
                matched_params=[MatchedParameter("next", "https://evil.com", True)],
            ),
            RedirectResult(url="https://example.com/page?next=2"),
        ]

    def test_report(self):
        out = _render(print_redirects, self._results(), silent=False)
        assert out == (
            "\nPotential Open Redirects:\n"
            "https://example.com/login?next=https://evil.com\n"
            "  Parameter: next = https://evil.com (Known: true)\n"
        )

    def test_silent_prints_urls_only(self):
        out = _render(print_redirects, self._results(), silent=True)
        assert out == "https://example.com/login?next=https://evil.com\n"

    def test_nothing_vulnerable(self):
        assert _render(print_redirects, [RedirectResult(url="https://a.io")], silent=False) == ""


def test_print_wordlist():
    assert _render(print_wordlist, ["alpha", "beta"]) == "alpha\nbeta\n"
