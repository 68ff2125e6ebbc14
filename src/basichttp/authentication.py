"""Pluggable credential injection."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from requests.auth import AuthBase, HTTPBasicAuth

from .connection import Connection
from .exceptions import AuthenticationError
from .transport import HttpsTransport

if TYPE_CHECKING:
    from .request.base import AbstractRequest


class HTTPBearerAuth(AuthBase):
    """Attaches a bearer token to the given Request object."""

    def __init__(self, token: str) -> None:
        self.token = token

    def __eq__(self, other: object) -> bool:
        return self.token == getattr(other, "token", None)

    def __ne__(self, other: object) -> bool:
        return not self == other

    def __call__(self, r):
        r.headers["Authorization"] = f"Bearer {self.token}"
        return r


class Authentication(ABC):
    """
    Credential strategy applied to a connection after validation.

    Implementations are compared by value, so a request never holds two
    equal authentications.
    """

    @abstractmethod
    def validate(self, request: AbstractRequest) -> Authentication:
        """
        Check the authentication against the request it is used for.

        Raises:
            AuthenticationError: If the authentication cannot be applied
        """

    @abstractmethod
    def configure(self, connection: Connection) -> Authentication:
        """Inject the credentials into a connection handle."""


@dataclass(frozen=True)
class BasicAuthentication(Authentication):
    """HTTP Basic credentials."""

    username: str
    password: str = field(default="", repr=False)

    def validate(self, request: AbstractRequest) -> BasicAuthentication:
        if not self.username:
            raise AuthenticationError("Basic authentication requires a username")
        return self

    def configure(self, connection: Connection) -> BasicAuthentication:
        connection.auth = HTTPBasicAuth(self.username, self.password)
        return self


@dataclass(frozen=True)
class BearerAuthentication(Authentication):
    """OAuth2 style bearer token."""

    token: str = field(repr=False)

    def validate(self, request: AbstractRequest) -> BearerAuthentication:
        if not self.token:
            raise AuthenticationError("Bearer authentication requires a token")
        return self

    def configure(self, connection: Connection) -> BearerAuthentication:
        connection.auth = HTTPBearerAuth(self.token)
        return self


@dataclass(frozen=True)
class ClientCertificateAuthentication(Authentication):
    """TLS client certificate, optionally with a separate key file."""

    certificate_path: str
    key_path: Optional[str] = None

    def validate(self, request: AbstractRequest) -> ClientCertificateAuthentication:
        if not isinstance(request.transport, HttpsTransport):
            raise AuthenticationError("Client certificate authentication requires an HttpsTransport")
        if not os.path.isfile(self.certificate_path):
            raise AuthenticationError(f"Client certificate not found: {self.certificate_path}")
        if self.key_path is not None and not os.path.isfile(self.key_path):
            raise AuthenticationError(f"Client certificate key not found: {self.key_path}")
        return self

    def configure(self, connection: Connection) -> ClientCertificateAuthentication:
        if self.key_path is None:
            connection.cert = self.certificate_path
        else:
            connection.cert = (self.certificate_path, self.key_path)
        return self
