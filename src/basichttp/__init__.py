"""
basichttp - Basic HTTP/HTTPS requests with effective request capture.

Usage:
    from basichttp import HttpsTransport, JsonRequest

    request = JsonRequest()
    request.endpoint = "https://api.example.com/items"
    request.transport = HttpsTransport()
    request.perform()

    print(request.effective_raw_header)
    print(request.response.body)
"""

__version__ = "1.0.0"

from .authentication import (
    Authentication,
    BasicAuthentication,
    BearerAuthentication,
    ClientCertificateAuthentication,
)
from .connection import Connection
from .exceptions import (
    AuthenticationError,
    ConnectionTimeoutError,
    HttpClientError,
    InvalidArgumentError,
    NetworkError,
    NetworkTransportError,
    RequestConfigurationError,
    ResponseParseError,
)
from .message import BinaryBody, Body, FormBody, Header, JsonBody, Message, StringBody, parse_header_block
from .models.config import ClientConfig
from .request import AbstractRequest, JsonRequest, Request, RequestMethod, RequestState
from .response import JsonResponse, Response
from .transport import HttpsTransport, HttpTransport, Transport
from .util.url import UrlUtil

__all__ = [
    "__version__",
    # Requests
    "AbstractRequest",
    "JsonRequest",
    "Request",
    "RequestMethod",
    "RequestState",
    # Responses
    "JsonResponse",
    "Response",
    # Collaborators
    "Connection",
    "HttpTransport",
    "HttpsTransport",
    "Transport",
    "Authentication",
    "BasicAuthentication",
    "BearerAuthentication",
    "ClientCertificateAuthentication",
    # Message
    "BinaryBody",
    "Body",
    "FormBody",
    "Header",
    "JsonBody",
    "Message",
    "StringBody",
    "parse_header_block",
    # Config
    "ClientConfig",
    "UrlUtil",
    # Errors
    "AuthenticationError",
    "ConnectionTimeoutError",
    "HttpClientError",
    "InvalidArgumentError",
    "NetworkError",
    "NetworkTransportError",
    "RequestConfigurationError",
    "ResponseParseError",
]
