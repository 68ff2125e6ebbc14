"""Outgoing message: headers, cookies and body."""

from __future__ import annotations

from typing import Optional

from ..connection import Connection
from ..exceptions import InvalidArgumentError
from .body import Body
from .header import Header


class Message:
    """
    Body and header configuration of an outgoing request.

    Headers keep their insertion order. Setting a header replaces every
    header of the same name (case-insensitive), adding one keeps the
    existing ones and merges the values on the wire.

    Example:
        message = Message()
        message.add_header(Header("Accept", ["application/json"]))
        message.set_body(JsonBody({"name": "value"}))
    """

    def __init__(self, body: Optional[Body] = None) -> None:
        self._headers: list[Header] = []
        self._cookies: dict[str, str] = {}
        self._body = body

    @property
    def headers(self) -> list[Header]:
        return list(self._headers)

    def get_header(self, name: str) -> Optional[Header]:
        """First header with the given name, if any."""
        for header in self._headers:
            if header.has_name(name):
                return header
        return None

    def has_header(self, name: str) -> bool:
        return self.get_header(name) is not None

    def add_header(self, header: Header) -> Message:
        if not isinstance(header, Header):
            raise InvalidArgumentError(f"Expected a Header. Got {type(header).__name__}")
        self._headers.append(header)
        return self

    def set_header(self, header: Header) -> Message:
        self.remove_header(header.name)
        return self.add_header(header)

    def remove_header(self, name: str) -> Message:
        self._headers = [header for header in self._headers if not header.has_name(name)]
        return self

    @property
    def cookies(self) -> dict[str, str]:
        return dict(self._cookies)

    def add_cookie(self, name: str, value: str) -> Message:
        if not isinstance(name, str) or not isinstance(value, str):
            raise InvalidArgumentError("Cookie names and values have to be a string.")
        self._cookies[name] = value
        return self

    def remove_cookie(self, name: str) -> Message:
        self._cookies.pop(name, None)
        return self

    def has_cookie(self, name: str) -> bool:
        return name in self._cookies

    @property
    def body(self) -> Optional[Body]:
        return self._body

    def set_body(self, body: Optional[Body]) -> Message:
        if body is not None and not isinstance(body, Body):
            raise InvalidArgumentError(f"Expected a Body. Got {type(body).__name__}")
        self._body = body
        return self

    def has_body(self) -> bool:
        return self._body is not None

    def configure(self, connection: Connection) -> Message:
        """Write headers, cookies and body onto a connection handle."""
        merged: dict[str, list[str]] = {}
        names: dict[str, str] = {}
        for header in self._headers:
            key = header.name.lower()
            names.setdefault(key, header.name)
            merged.setdefault(key, []).extend(header.values)
        for key, values in merged.items():
            connection.headers[names[key]] = ", ".join(values)

        connection.cookies.update(self._cookies)

        if self._body is not None:
            self._body.configure(connection)
        return self
