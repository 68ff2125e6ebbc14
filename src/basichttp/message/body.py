"""Request bodies."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import Any, Mapping
from urllib.parse import urlencode

from ..connection import Connection


class Body(ABC):
    """Payload of an outgoing request together with its content type."""

    content_type: str = "application/octet-stream"

    @abstractmethod
    def content(self) -> bytes:
        """Encoded payload."""

    def configure(self, connection: Connection) -> Body:
        connection.body = self.content()
        connection.headers["Content-Type"] = self.content_type
        return self


class StringBody(Body):
    """Text payload encoded as UTF-8."""

    def __init__(self, text: str, content_type: str = "text/plain; charset=utf-8") -> None:
        self.text = text
        self.content_type = content_type

    def content(self) -> bytes:
        return self.text.encode("utf-8")


class BinaryBody(Body):
    """Raw bytes sent as-is."""

    def __init__(self, data: bytes, content_type: str = "application/octet-stream") -> None:
        self.data = data
        self.content_type = content_type

    def content(self) -> bytes:
        return self.data


class JsonBody(Body):
    """JSON-serialized payload."""

    content_type = "application/json"

    def __init__(self, data: Any) -> None:
        self.data = data

    def content(self) -> bytes:
        return json.dumps(self.data).encode("utf-8")


class FormBody(Body):
    """URL-encoded form payload, field order preserved."""

    content_type = "application/x-www-form-urlencoded"

    def __init__(self, fields: Mapping[str, Any]) -> None:
        self.fields = dict(fields)

    def content(self) -> bytes:
        return urlencode(self.fields).encode("ascii")
