"""Exception hierarchy for basichttp."""


class HttpClientError(Exception):
    """Base class for all errors raised by basichttp."""


class InvalidArgumentError(HttpClientError, ValueError):
    """A setter or helper was called with an unusable argument."""


class RequestConfigurationError(HttpClientError):
    """The request is configured in a way that cannot be performed."""


class AuthenticationError(HttpClientError):
    """An authentication rejected the request during validation."""


class ResponseParseError(HttpClientError):
    """The response body could not be parsed into the expected form."""


class NetworkError(HttpClientError):
    """Base class for errors reported by the transfer layer."""


class ConnectionTimeoutError(NetworkError):
    """The transfer layer gave up waiting for the remote side."""


class NetworkTransportError(NetworkError):
    """Any other failure reported by the transfer layer."""
