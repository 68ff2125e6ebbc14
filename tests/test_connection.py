"""Tests for the transfer handle."""

import pytest
import requests

from basichttp.connection import Connection, format_request_header, format_response_header

from .conftest import StubAdapter


class TestFormatRequestHeader:
    """Tests for rendering the outgoing header block."""

    def test_request_line_host_and_headers(self):
        prepared = requests.Request(
            "GET",
            "http://example.com/a/b?x=1",
            headers={"Accept": "*/*", "X-Trace": "abc"},
        ).prepare()

        assert format_request_header(prepared) == (
            "GET /a/b?x=1 HTTP/1.1\r\nHost: example.com\r\nAccept: */*\r\nX-Trace: abc\r\n\r\n"
        )

    def test_host_drops_userinfo_and_keeps_port(self):
        prepared = requests.Request("GET", "http://user:pw@example.com:8080/").prepare()
        block = format_request_header(prepared)

        assert "Host: example.com:8080\r\n" in block
        assert "pw" not in block.split("\r\n")[1]

    def test_explicit_host_header_is_not_duplicated(self):
        prepared = requests.Request("GET", "http://example.com/", headers={"Host": "other"}).prepare()
        block = format_request_header(prepared)

        assert block.count("Host:") == 1
        assert "Host: other\r\n" in block


class TestFormatResponseHeader:
    """Tests for rendering the received header block."""

    def test_status_line_and_headers(self):
        response = requests.Response()
        response.status_code = 404
        response.reason = "Not Found"
        response.headers["Content-Type"] = "text/html"

        assert format_response_header(response) == "HTTP/1.1 404 Not Found\r\nContent-Type: text/html\r\n\r\n"

    def test_missing_reason(self):
        response = requests.Response()
        response.status_code = 204

        assert format_response_header(response).startswith("HTTP/1.1 204\r\n")


class TestConnection:
    """Tests for Connection options and lifecycle."""

    def test_target_url_applies_port(self):
        with Connection() as connection:
            connection.url = "http://user@example.com:80/p?q=1#f"
            connection.port = 9000

            assert connection.target_url() == "http://user@example.com:9000/p?q=1#f"

    def test_target_url_ipv6(self):
        with Connection() as connection:
            connection.url = "http://[::1]/"
            connection.port = 8080

            assert connection.target_url() == "http://[::1]:8080/"

    def test_target_url_requires_url(self):
        with Connection() as connection:
            with pytest.raises(RuntimeError):
                connection.target_url()

    def test_execute_records_results(self):
        adapter = StubAdapter(status_code=201, reason="Created", body=b"{}", headers={"Location": "/items/1"})
        with Connection(adapter=adapter) as connection:
            connection.method = "POST"
            connection.url = "https://api.example.com/items"
            connection.user_agent = "agent/1"
            connection.headers["X-One"] = "1"
            connection.cookies["session"] = "abc"
            connection.body = b"{}"

            body = connection.execute()

        assert body == b"{}"
        assert connection.status_code == 201
        assert connection.reason == "Created"
        assert connection.effective_url == "https://api.example.com/items"
        assert connection.effective_header_out.startswith("POST /items HTTP/1.1\r\nHost: api.example.com\r\n")
        assert "User-Agent: agent/1\r\n" in connection.effective_header_out
        assert "X-One: 1\r\n" in connection.effective_header_out
        assert "Cookie: session=abc\r\n" in connection.effective_header_out
        assert connection.response_header.startswith("HTTP/1.1 201 Created\r\n")
        assert connection.response_headers["location"] == "/items/1"
        assert connection.total_time is not None

    def test_redirects_are_not_followed(self):
        adapter = StubAdapter(status_code=302, reason="Found", headers={"Location": "http://example.com/next"})
        with Connection(adapter=adapter) as connection:
            connection.url = "http://example.com/start"
            connection.execute()

        assert len(adapter.sent) == 1
        assert connection.status_code == 302
        assert connection.effective_url == "http://example.com/start"

    def test_close_is_idempotent(self):
        adapter = StubAdapter()
        connection = Connection(adapter=adapter)
        connection.close()
        connection.close()

        assert connection.closed is True
        assert adapter.closed is True

    def test_execute_after_close(self):
        connection = Connection()
        connection.close()
        connection.url = "http://example.com/"

        with pytest.raises(RuntimeError):
            connection.execute()

    def test_transfer_errors_propagate(self):
        adapter = StubAdapter(error=requests.ConnectionError("refused"))
        with Connection(adapter=adapter) as connection:
            connection.url = "http://example.com/"
            with pytest.raises(requests.ConnectionError):
                connection.execute()

        assert connection.status_code is None
        assert connection.effective_header_out is None
