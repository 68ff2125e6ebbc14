"""Tests for the raw header block parser and the Header value object."""

import pytest

from basichttp import Header, parse_header_block


class TestParseHeaderBlock:
    """Tests for parse_header_block."""

    def test_request_block(self):
        """Request line becomes the status, header lines become Headers in order."""
        status, headers = parse_header_block("GET / HTTP/1.1\r\nHost: example.com\r\nX-Test: a,b,c\r\n")

        assert status == "GET / HTTP/1.1"
        assert headers == [
            Header("Host", ["example.com"]),
            Header("X-Test", ["a", "b", "c"]),
        ]

    def test_empty_input(self):
        """Empty and missing input produce no status and no headers."""
        assert parse_header_block("") == (None, [])
        assert parse_header_block(None) == (None, [])

    def test_last_line_without_colon_wins(self):
        """A later colon-less line overwrites the earlier status."""
        raw = "GET /first HTTP/1.1\r\nHost: example.com\r\nPOST /second HTTP/1.1\r\n"
        status, headers = parse_header_block(raw)

        assert status == "POST /second HTTP/1.1"
        assert [header.name for header in headers] == ["Host"]

    def test_duplicate_names_are_not_merged(self):
        """Each header line yields its own entry."""
        raw = "GET / HTTP/1.1\r\nCookie: a=1\r\nCookie: b=2\r\n"
        _, headers = parse_header_block(raw)

        assert headers == [Header("Cookie", ["a=1"]), Header("Cookie", ["b=2"])]

    def test_value_segments_are_not_trimmed(self):
        """Only the separator after the colon is dropped, segments stay verbatim."""
        _, headers = parse_header_block("Accept: text/html, application/json ,*/*\r\n")

        assert headers[0].values == ("text/html", " application/json ", "*/*")

    def test_split_on_first_colon_only(self):
        """Colons inside the value stay part of the value."""
        _, headers = parse_header_block("Host: example.com:8080\r\n")

        assert headers == [Header("Host", ["example.com:8080"])]

    def test_quoted_commas_are_split(self):
        """Commas inside quoted strings are split like any other comma."""
        _, headers = parse_header_block('Prefer: a="x,y"\r\n')

        assert headers[0].values == ('a="x', 'y"')

    def test_empty_lines_are_discarded(self):
        """Blank lines, including the terminating one, are ignored."""
        status, headers = parse_header_block("\r\n\r\nHTTP/1.1 200 OK\r\n\r\nA: 1\r\n\r\n")

        assert status == "HTTP/1.1 200 OK"
        assert headers == [Header("A", ["1"])]

    def test_empty_value(self):
        """A header with nothing after the colon keeps one empty segment."""
        _, headers = parse_header_block("X-Empty:\r\n")

        assert headers == [Header("X-Empty", [""])]

    def test_parser_is_deterministic(self):
        """Parsing the same block twice gives equal results."""
        raw = "PUT /x HTTP/1.1\r\nA: 1,2\r\nB: 3\r\n"
        assert parse_header_block(raw) == parse_header_block(raw)


class TestHeader:
    """Tests for the Header value object."""

    def test_values_as_string(self):
        assert Header("Accept", ["text/html", "application/json"]).values_as_string() == (
            "text/html, application/json"
        )

    def test_name_comparison_is_case_insensitive(self):
        assert Header("Content-Type", ["text/plain"]).has_name("content-type")

    def test_equality_by_value(self):
        assert Header("A", ["1"]) == Header("A", ["1"])
        assert Header("A", ["1"]) != Header("A", ["2"])

    def test_values_are_frozen(self):
        header = Header("Accept", ["text/html"])

        assert header.values == ("text/html",)
        with pytest.raises(AttributeError):
            header.values.append("application/json")

    def test_hashable(self):
        assert hash(Header("A", ["1"])) == hash(Header("A", ("1",)))
        assert len({Header("A", ["1"]), Header("A", ["1"]), Header("B", ["1"])}) == 2
