"""Responses parsed from a finished transfer."""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from charset_normalizer import from_bytes as detect_encoding

from .connection import Connection
from .exceptions import ResponseParseError
from .message.header import Header, parse_header_block

logger = logging.getLogger(__name__)

_TEXTUAL_TYPES = frozenset(
    {
        "application/javascript",
        "application/ecmascript",
        "application/x-www-form-urlencoded",
        "application/x-ndjson",
        "application/graphql",
    }
)
_TEXTUAL_SUFFIXES = ("json", "xml", "yaml")


class Response:
    """
    Status, headers and body of a received response.

    Attributes:
        status_code: HTTP status code (200, 404, etc.)
        status_text: Reason phrase sent with the status code
        status_line: Raw status line, e.g. "HTTP/1.1 200 OK"
        headers: Response headers in received order
        raw_body: Undecoded response body
        body: Decoded text, or the raw bytes for binary media types
        total_time: Seconds between sending and receiving the headers
    """

    def __init__(self) -> None:
        self.status_code: Optional[int] = None
        self.status_text: Optional[str] = None
        self.status_line: Optional[str] = None
        self.headers: list[Header] = []
        self.raw_body: bytes = b""
        self.body: Any = None
        self.total_time: Optional[float] = None

    def populate_from_result(self, connection: Connection, raw_body: bytes) -> Response:
        """
        Fill the response from an executed connection handle.

        Args:
            connection: The handle after execute() returned
            raw_body: Body returned by execute()

        Returns:
            The populated response
        """
        self.status_code = connection.status_code
        self.status_text = connection.reason
        self.status_line, self.headers = parse_header_block(connection.response_header)
        self.total_time = connection.total_time
        self.raw_body = raw_body
        self.body = self.parse_body(raw_body)
        return self

    def parse_body(self, raw_body: bytes) -> Any:
        """
        Turn the raw body into the value exposed as ``body``.

        Textual bodies are decoded to str, anything else stays bytes.
        """
        if not self.is_text:
            return raw_body
        return self._decode_content(raw_body, self.content_type or "")

    @property
    def text(self) -> str:
        """Body decoded as text regardless of the response type."""
        return self._decode_content(self.raw_body, self.content_type or "")

    @property
    def content_type(self) -> Optional[str]:
        header = self.get_header("Content-Type")
        return header.values_as_string() if header else None

    @property
    def is_text(self) -> bool:
        """True unless the Content-Type names a binary media type."""
        content_type = self.content_type
        if not content_type:
            return True
        media_type, _, params = content_type.partition(";")
        media_type = media_type.strip().lower()
        if "charset=" in params.lower() or media_type.startswith("text/"):
            return True
        return media_type.endswith(_TEXTUAL_SUFFIXES) or media_type in _TEXTUAL_TYPES

    def get_header(self, name: str) -> Optional[Header]:
        """First header with the given name (case-insensitive), if any."""
        for header in self.headers:
            if header.has_name(name):
                return header
        return None

    def has_header(self, name: str) -> bool:
        return self.get_header(name) is not None

    def _decode_content(self, content: bytes, content_type: str) -> str:
        """
        Decode content with encoding detection.

        Fallback chain:
        1. Content-Type header charset
        2. charset-normalizer detection
        3. UTF-8 with replacement
        """
        if not content:
            return ""

        encoding = None
        for part in content_type.split(";"):
            part = part.strip()
            if part.lower().startswith("charset="):
                encoding = part.split("=", 1)[1].strip().strip("\"'")
                break

        if encoding:
            try:
                return content.decode(encoding)
            except (UnicodeDecodeError, LookupError):
                logger.debug(f"Failed to decode with declared encoding: {encoding}")

        best_match = detect_encoding(content).best()
        if best_match is not None:
            logger.debug(f"Detected encoding: {best_match.encoding}")
            return str(best_match)

        return content.decode("utf-8", errors="replace")

    def __repr__(self) -> str:
        return f"<{type(self).__name__} [{self.status_code}]>"


class JsonResponse(Response):
    """Response whose body is a JSON document."""

    def parse_body(self, raw_body: bytes) -> Any:
        text = self._decode_content(raw_body, self.content_type or "")
        if not text.strip():
            return None
        try:
            return json.loads(text)
        except ValueError as e:
            raise ResponseParseError(f"Response body is not valid JSON: {e}") from e
