"""Single-use transfer handle built on a requests session."""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any, Optional, Union
from urllib.parse import urlsplit, urlunsplit

import requests
from requests.adapters import BaseAdapter
from requests.auth import AuthBase
from requests.structures import CaseInsensitiveDict

logger = logging.getLogger(__name__)

# Timeout accepted by requests: total seconds or (connect, read)
Timeout = Union[float, tuple[float, float], None]


def format_request_header(prepared: requests.PreparedRequest) -> str:
    """
    Render a prepared request as the header block that goes on the wire.

    The block starts with the request line, carries the Host header the
    way http.client adds it, then every prepared header, and ends with
    an empty line. Lines are CRLF-separated.

    Args:
        prepared: The request as sent by the session

    Returns:
        Raw outgoing header block
    """
    lines = [f"{prepared.method} {prepared.path_url} HTTP/1.1"]
    if "Host" not in prepared.headers:
        netloc = urlsplit(prepared.url or "").netloc
        lines.append(f"Host: {netloc.rpartition('@')[2]}")
    lines.extend(f"{name}: {value}" for name, value in prepared.headers.items())
    return "\r\n".join(lines) + "\r\n\r\n"


def format_response_header(response: requests.Response) -> str:
    """Render a received response as a status line plus header lines."""
    lines = [f"HTTP/1.1 {response.status_code} {response.reason or ''}".rstrip()]
    lines.extend(f"{name}: {value}" for name, value in response.headers.items())
    return "\r\n".join(lines) + "\r\n\r\n"


class Connection:
    """
    Transfer handle for exactly one request/response exchange.

    Collaborators (transports, messages, authentications) write their
    settings onto the public attributes, then execute() performs a single
    blocking transfer. Redirects are not followed. After a successful
    transfer the effective_* and response_* attributes describe what was
    actually sent and received.

    The handle owns a requests.Session and must be closed; use it as a
    context manager to release it on every exit path.

    Example:
        with Connection() as connection:
            connection.method = "GET"
            connection.url = "https://example.com/"
            body = connection.execute()
            print(connection.effective_header_out)
    """

    def __init__(
        self,
        adapter: Optional[BaseAdapter] = None,
        timeout: Timeout = None,
    ) -> None:
        """
        Initialize the handle.

        Args:
            adapter: Optional transport adapter mounted for http:// and https://
            timeout: Default timeout handed to the transfer layer
        """
        self._session: Optional[requests.Session] = requests.Session()
        if adapter is not None:
            self._session.mount("http://", adapter)
            self._session.mount("https://", adapter)

        # Options
        self.method: str = "GET"
        self.url: Optional[str] = None
        self.user_agent: Optional[str] = None
        self.port: Optional[int] = None
        self.headers: CaseInsensitiveDict = CaseInsensitiveDict()
        self.cookies: dict[str, str] = {}
        self.body: Any = None
        self.auth: Optional[AuthBase] = None
        self.verify: Union[bool, str] = True
        self.cert: Union[str, tuple[str, str], None] = None
        self.timeout: Timeout = timeout

        # Transfer results
        self.effective_url: Optional[str] = None
        self.effective_header_out: Optional[str] = None
        self.status_code: Optional[int] = None
        self.reason: Optional[str] = None
        self.response_header: Optional[str] = None
        self.response_headers: CaseInsensitiveDict = CaseInsensitiveDict()
        self.total_time: Optional[float] = None

    def __enter__(self) -> Connection:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._session is None

    def close(self) -> None:
        """Release the underlying session. Safe to call more than once."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def target_url(self) -> str:
        """
        URL the transfer is sent to, with the port option applied.

        Raises:
            RuntimeError: If no URL was configured
        """
        if not self.url:
            raise RuntimeError("Connection has no URL configured")
        if self.port is None:
            return self.url
        parts = urlsplit(self.url)
        userinfo, at, _ = parts.netloc.rpartition("@")
        host = parts.hostname or ""
        if ":" in host:
            host = f"[{host}]"
        netloc = f"{userinfo}{at}{host}:{self.port}"
        return urlunsplit((parts.scheme, netloc, parts.path, parts.query, parts.fragment))

    def execute(self) -> bytes:
        """
        Perform the transfer.

        Returns:
            Raw response body

        Raises:
            RuntimeError: If the handle was already closed
            requests.RequestException: On any transfer-level failure
        """
        if self._session is None:
            raise RuntimeError("Connection is closed")

        headers = CaseInsensitiveDict()
        if self.user_agent is not None:
            headers["User-Agent"] = self.user_agent
        headers.update(self.headers)

        request = requests.Request(
            method=self.method,
            url=self.target_url(),
            headers=headers,
            data=self.body,
            cookies=self.cookies or None,
            auth=self.auth,
        )
        prepared = self._session.prepare_request(request)
        settings = self._session.merge_environment_settings(prepared.url, {}, None, self.verify, self.cert)

        logger.debug(f"Sending {prepared.method} {prepared.url}")
        response = self._session.send(
            prepared,
            timeout=self.timeout,
            allow_redirects=False,
            **settings,
        )

        sent = response.request or prepared
        self.effective_url = response.url or sent.url
        self.effective_header_out = format_request_header(sent)
        self.status_code = response.status_code
        self.reason = response.reason
        self.response_header = format_response_header(response)
        self.response_headers = CaseInsensitiveDict(response.headers)
        self.total_time = response.elapsed.total_seconds() if response.elapsed is not None else None

        logger.debug(f"Received {response.status_code} from {self.effective_url}")
        return response.content or b""
