"""Scheme-specific connection configuration."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

from .connection import Connection

if TYPE_CHECKING:
    from .models.config import ClientConfig


class Transport(ABC):
    """Strategy that applies low-level connection settings."""

    @abstractmethod
    def configure(self, connection: Connection) -> Transport:
        """Apply the transport settings to a connection handle."""


class HttpTransport(Transport):
    """
    Plain HTTP transport.

    Args:
        timeout: Optional total timeout in seconds, overriding the
            request's configured connect/read timeouts
    """

    def __init__(self, timeout: Optional[float] = None) -> None:
        self.timeout = timeout

    def configure(self, connection: Connection) -> HttpTransport:
        if self.timeout is not None:
            connection.timeout = self.timeout
        return self

    def __repr__(self) -> str:
        return f"{type(self).__name__}(timeout={self.timeout!r})"


class HttpsTransport(HttpTransport):
    """
    HTTPS transport with TLS verification settings.

    Args:
        timeout: Optional total timeout in seconds
        verify_peer: Verify the server certificate and host name
        ca_bundle: Optional CA bundle used instead of the default store
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        verify_peer: bool = True,
        ca_bundle: Union[str, Path, None] = None,
    ) -> None:
        super().__init__(timeout=timeout)
        self.verify_peer = verify_peer
        self.ca_bundle = ca_bundle

    @classmethod
    def from_config(cls, config: ClientConfig) -> HttpsTransport:
        """Build a transport from the TLS settings of a client config."""
        return cls(verify_peer=config.verify_peer, ca_bundle=config.ca_bundle)

    def configure(self, connection: Connection) -> HttpsTransport:
        super().configure(connection)
        if not self.verify_peer:
            connection.verify = False
        elif self.ca_bundle is not None:
            connection.verify = str(self.ca_bundle)
        else:
            connection.verify = True
        return self

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(timeout={self.timeout!r}, "
            f"verify_peer={self.verify_peer!r}, ca_bundle={self.ca_bundle!r})"
        )
