"""Unit tests for the line-level pattern matchers."""

from __future__ import annotations

import pytest

from urlsluice.patterns import (
    PatternTable,
    QueryParam,
    is_valid_ipv4,
    match_domains,
    match_emails,
    match_ipv4,
    match_query_params,
    match_uuids,
)


@pytest.fixture(scope="module")
def table() -> PatternTable:
    return PatternTable.default()


class TestUuidMatcher:
    def test_version_4(self, table):
        line = "id=550e8400-e29b-41d4-a716-446655440000 done"
        assert match_uuids(table, line, 4) == ["550e8400-e29b-41d4-a716-446655440000"]

    def test_version_filters_other_versions(self, table):
        line = "550e8400-e29b-41d4-a716-446655440000 550e8400-e29b-11d4-a716-446655440000"
        assert match_uuids(table, line, 1) == ["550e8400-e29b-11d4-a716-446655440000"]

    @pytest.mark.parametrize("version", [1, 2, 3, 4, 5])
    def test_each_version_has_a_regex(self, table, version):
        uuid = f"6ba7b810-9dad-{version}1d1-80b4-00c04fd430c8"
        assert match_uuids(table, uuid, version) == [uuid]

    def test_version_zero_disabled(self, table):
        assert match_uuids(table, "550e8400-e29b-41d4-a716-446655440000", 0) == []

    def test_uppercase_not_matched(self, table):
        assert match_uuids(table, "550E8400-E29B-41D4-A716-446655440000", 4) == []

    def test_bad_variant_rejected(self, table):
        # Fourth group must start with 8, 9, a or b.
        assert match_uuids(table, "550e8400-e29b-41d4-c716-446655440000", 4) == []

    def test_table_is_read_only(self, table):
        with pytest.raises(TypeError):
            table.uuid[6] = table.uuid[4]  # type: ignore[index]


class TestEmailMatcher:
    def test_simple(self, table):
        assert match_emails(table, "mail user@example.com now") == ["user@example.com"]

    def test_multiple_on_line(self, table):
        line = "test@example.com, support@example.com"
        assert match_emails(table, line) == ["test@example.com", "support@example.com"]

    def test_plus_and_dots(self, table):
        assert match_emails(table, "<first.last+tag@mail.example.co.uk>") == [
            "first.last+tag@mail.example.co.uk"
        ]

    def test_missing_tld_not_matched(self, table):
        assert match_emails(table, "user@localhost") == []

    def test_non_ascii_word_chars_not_matched(self, table):
        assert match_emails(table, "üser@exämple.com") == []


class TestDomainMatcher:
    def test_https_and_http(self, table):
        line = "Visit https://example.com or http://test.com"
        assert match_domains(table, line) == ["example.com", "test.com"]

    def test_host_only_before_path(self, table):
        assert match_domains(table, "https://api.example.com/v1/users?id=1") == ["api.example.com"]

    def test_leading_dot_rejected(self, table):
        assert match_domains(table, "https://.example.com/") == []

    def test_trailing_dot_rejected(self, table):
        assert match_domains(table, "https://example.com./") == []

    def test_other_schemes_ignored(self, table):
        assert match_domains(table, "ftp://files.example.com/") == []


class TestIpv4Matcher:
    def test_valid_address(self, table):
        assert match_ipv4(table, "Server IPs: 192.168.1.1 and 10.0.0.1") == ["192.168.1.1", "10.0.0.1"]

    @pytest.mark.parametrize("bad", ["256.256.256.256", "999.0.0.1", "1.2.3.300"])
    def test_octet_out_of_range_rejected(self, table, bad):
        assert match_ipv4(table, bad) == []

    def test_shape_without_validation_would_match(self, table):
        # The regex alone accepts it; the semantic pass is what drops it.
        assert table.ipv4.findall("999.0.0.1") == ["999.0.0.1"]
        assert is_valid_ipv4("999.0.0.1") is False

    def test_embedded_in_word_not_matched(self, table):
        assert match_ipv4(table, "v1.2.3.4a") == []


class TestQueryParamMatcher:
    def test_pairs_from_url(self, table):
        got = match_query_params(table, "https://example.com/users?id=123&token=abc")
        assert got == [QueryParam("id", "123"), QueryParam("token", "abc")]
        assert [str(p) for p in got] == ["id=123", "token=abc"]

    def test_not_a_url(self, table):
        assert [str(p) for p in match_query_params(table, "not a url ?a=1&b=2")] == ["a=1", "b=2"]

    def test_empty_value(self, table):
        assert [str(p) for p in match_query_params(table, "/search?q=&page=2")] == ["q=", "page=2"]

    def test_no_delimiter(self, table):
        assert match_query_params(table, "key=value") == []
