"""Request configuration and the perform pipeline."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Optional, Union
from urllib.parse import quote, urlencode

import requests
from requests.adapters import BaseAdapter

from ..authentication import Authentication
from ..connection import Connection
from ..exceptions import (
    ConnectionTimeoutError,
    InvalidArgumentError,
    NetworkTransportError,
    RequestConfigurationError,
)
from ..message.header import Header, parse_header_block
from ..message.message import Message
from ..models.config import ClientConfig
from ..response import Response
from ..transport import HttpsTransport, HttpTransport, Transport
from ..util.url import UrlUtil

logger = logging.getLogger(__name__)

_SCALAR_TYPES = (str, int, float, bool)


def _scalar_to_string(value: object) -> str:
    # Booleans become "1" and ""
    if isinstance(value, bool):
        return "1" if value else ""
    return str(value)


class RequestMethod(str, Enum):
    """Supported HTTP request methods."""

    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"


class RequestState(str, Enum):
    """Lifecycle of a single perform() call."""

    IDLE = "idle"
    CONFIGURING = "configuring"
    EXECUTING = "executing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class AbstractRequest(ABC):
    """
    A configurable HTTP request that can be performed repeatedly.

    The request collects endpoint, method, query parameters, transport,
    message and authentications. perform() turns them into one blocking
    transfer and records both the response and the effective request,
    i.e. the URL and header block that were actually sent.

    Subclasses decide which Response type a transfer produces by
    implementing build_response().

    Example:
        request = Request()
        request.endpoint = "https://api.example.com/items"
        request.transport = HttpsTransport()
        request.message = Message()
        request.add_query_parameter("page", "2").perform()

        print(request.effective_status)
        print(request.response.status_code)
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        adapter: Optional[BaseAdapter] = None,
    ) -> None:
        """
        Initialize the request with an HTTP transport and GET method.

        Args:
            config: Client defaults (user agent, timeouts)
            adapter: Optional requests transport adapter used for every transfer
        """
        self._config = config or ClientConfig()
        self._adapter = adapter
        self._url_util = UrlUtil()

        self._user_agent: str = self._config.user_agent
        self._endpoint: Optional[str] = None
        self._port: Optional[int] = None
        self._method: str = RequestMethod.GET.value
        self._query_parameters: dict[str, str] = {}
        self._transport: Transport = HttpTransport()
        self._authentications: list[Authentication] = []
        self._message: Optional[Message] = None

        self.state = RequestState.IDLE
        self._reset_result()

    # -- user agent, endpoint, port, method ---------------------------------

    @property
    def user_agent(self) -> str:
        return self._user_agent

    @user_agent.setter
    def user_agent(self, user_agent: str) -> None:
        self._user_agent = user_agent

    def set_user_agent(self, user_agent: str) -> AbstractRequest:
        self.user_agent = user_agent
        return self

    @property
    def endpoint(self) -> Optional[str]:
        return self._endpoint

    @endpoint.setter
    def endpoint(self, endpoint: str) -> None:
        result = self._url_util.validate(endpoint)
        if not result.is_valid:
            raise InvalidArgumentError(f"The given endpoint is not a valid URL: {result.rejection_reason}")
        self._endpoint = endpoint

    def set_endpoint(self, endpoint: str) -> AbstractRequest:
        self.endpoint = endpoint
        return self

    @property
    def port(self) -> Optional[int]:
        return self._port

    @port.setter
    def port(self, port: Optional[int]) -> None:
        if port is not None:
            if isinstance(port, bool) or not isinstance(port, int) or not 0 < port < 65536:
                raise InvalidArgumentError(f"Port must be an integer between 1 and 65535. Got {port!r}")
        self._port = port

    def set_port(self, port: Optional[int]) -> AbstractRequest:
        self.port = port
        return self

    def has_port(self) -> bool:
        return self._port is not None

    @property
    def method(self) -> str:
        return self._method

    @method.setter
    def method(self, method: Union[RequestMethod, str]) -> None:
        try:
            self._method = RequestMethod(method.upper() if isinstance(method, str) else method).value
        except ValueError as e:
            raise InvalidArgumentError(f"Unsupported request method: {method!r}") from e

    def set_method(self, method: Union[RequestMethod, str]) -> AbstractRequest:
        self.method = method
        return self

    # -- query parameters ---------------------------------------------------

    @property
    def query_parameters(self) -> dict[str, str]:
        return dict(self._query_parameters)

    def has_query_parameters(self) -> bool:
        return len(self._query_parameters) > 0

    def has_query_parameter(self, name: str) -> bool:
        return name in self._query_parameters

    def count_query_parameters(self) -> int:
        return len(self._query_parameters)

    def add_query_parameter(self, name: str, value: str) -> AbstractRequest:
        if not isinstance(name, str) or not isinstance(value, str):
            raise InvalidArgumentError("Query parameter names and values have to be a string.")
        self._query_parameters[name] = value
        return self

    def set_query_parameters(self, parameters: Mapping[str, object]) -> AbstractRequest:
        if not isinstance(parameters, Mapping):
            raise InvalidArgumentError(
                f"Expected the query parameters as a mapping. Got {type(parameters).__name__}"
            )
        coerced: dict[str, str] = {}
        for name, value in parameters.items():
            if not isinstance(value, _SCALAR_TYPES):
                raise InvalidArgumentError(
                    f"Expected the query parameters as mapping of scalar values. Got {type(value).__name__}"
                )
            coerced[str(name)] = _scalar_to_string(value)
        self._query_parameters = coerced
        return self

    def remove_query_parameter(self, name: str) -> AbstractRequest:
        self._query_parameters.pop(name, None)
        return self

    def remove_query_parameters(self) -> AbstractRequest:
        self._query_parameters = {}
        return self

    # -- transport and message ----------------------------------------------

    @property
    def transport(self) -> Transport:
        return self._transport

    @transport.setter
    def transport(self, transport: Transport) -> None:
        if not isinstance(transport, Transport):
            raise InvalidArgumentError(f"Expected a Transport. Got {type(transport).__name__}")
        self._transport = transport

    def set_transport(self, transport: Transport) -> AbstractRequest:
        self.transport = transport
        return self

    @property
    def message(self) -> Optional[Message]:
        return self._message

    @message.setter
    def message(self, message: Message) -> None:
        if not isinstance(message, Message):
            raise InvalidArgumentError(f"Expected a Message. Got {type(message).__name__}")
        self._message = message

    def set_message(self, message: Message) -> AbstractRequest:
        self.message = message
        return self

    # -- authentications ----------------------------------------------------

    @property
    def authentications(self) -> list[Authentication]:
        return list(self._authentications)

    def set_authentications(self, authentications: Iterable[Authentication]) -> AbstractRequest:
        """Replace all authentications. Duplicates are kept as given."""
        authentications = list(authentications)
        for authentication in authentications:
            if not isinstance(authentication, Authentication):
                raise InvalidArgumentError(
                    f"Expected an Authentication. Got {type(authentication).__name__}"
                )
        self._authentications = authentications
        return self

    def add_authentication(self, authentication: Authentication) -> AbstractRequest:
        if not isinstance(authentication, Authentication):
            raise InvalidArgumentError(f"Expected an Authentication. Got {type(authentication).__name__}")
        if not self.has_authentication(authentication):
            self._authentications.append(authentication)
        return self

    def remove_authentication(self, authentication: Authentication) -> AbstractRequest:
        for index, existing in enumerate(self._authentications):
            if existing == authentication:
                del self._authentications[index]
                break
        return self

    def has_authentication(self, authentication: Authentication) -> bool:
        return any(existing == authentication for existing in self._authentications)

    def has_authentications(self) -> bool:
        return len(self._authentications) > 0

    def count_authentications(self) -> int:
        return len(self._authentications)

    # -- perform --------------------------------------------------------------

    def calculate_endpoint(self) -> Optional[str]:
        """
        Endpoint with the query parameters appended.

        Parameters are percent-encoded in insertion order and joined with
        "?" or, when the endpoint already carries a query, with "&".
        """
        endpoint = self._endpoint
        if endpoint is not None and self.has_query_parameters():
            glue = "&" if "?" in endpoint else "?"
            endpoint += glue + urlencode(self._query_parameters, quote_via=quote)
        return endpoint

    def configure_connection(self, connection: Connection) -> AbstractRequest:
        """Apply method, target URL, user agent and port to a connection handle."""
        if not isinstance(connection, Connection):
            raise InvalidArgumentError(
                f"Connection argument invalid. Expected a Connection. Got {type(connection).__name__}"
            )
        connection.method = self._method
        connection.url = self.calculate_endpoint()
        connection.user_agent = self._user_agent
        if self.has_port():
            connection.port = self._port
        return self

    def build_connection(self) -> Connection:
        """Create the transfer handle for one perform() call."""
        return Connection(adapter=self._adapter, timeout=self._config.timeout)

    def pre_perform(self) -> None:
        """
        Validate the configuration before any connection is created.

        Raises:
            RequestConfigurationError: On a missing endpoint or message, or
                an HTTPS endpoint without an HttpsTransport
        """
        if self._endpoint is None:
            raise RequestConfigurationError("No endpoint configured")
        if self._message is None:
            raise RequestConfigurationError("No message configured")
        scheme = self._url_util.get_scheme(self._endpoint)
        if scheme == "HTTPS" and not isinstance(self._transport, HttpsTransport):
            raise RequestConfigurationError(
                "Transport misconfiguration. Use HttpsTransport for HTTPS requests."
            )

    def perform(self) -> AbstractRequest:
        """
        Execute the request.

        Clears the previous result, validates the configuration, lets the
        transport, the message and every authentication (in order)
        configure a fresh connection and performs the transfer.

        Returns:
            The request itself, with response and effective state populated

        Raises:
            RequestConfigurationError: On an invalid configuration
            AuthenticationError: If an authentication rejects the request
            ConnectionTimeoutError: If the transfer timed out
            NetworkTransportError: On any other transfer failure
        """
        self._reset_result()
        self.state = RequestState.CONFIGURING
        try:
            self.pre_perform()
            with self.build_connection() as connection:
                self.configure_connection(connection)
                self._transport.configure(connection)
                self._message.configure(connection)
                for authentication in self._authentications:
                    authentication.validate(self).configure(connection)

                self.state = RequestState.EXECUTING
                logger.debug(f"Performing {self._method} {connection.url}")
                raw_body = self._execute(connection)

                response = self.build_response()
                response.populate_from_result(connection, raw_body)
                self._set_effective_properties(connection)
                self._response = response
        except Exception:
            self._reset_result()
            self.state = RequestState.FAILED
            raise

        self.state = RequestState.SUCCEEDED
        logger.debug(f"Request finished with status {self._response.status_code}: {self._effective_status}")
        return self

    def _execute(self, connection: Connection) -> bytes:
        try:
            return connection.execute()
        except requests.Timeout as e:
            logger.warning(f"Request to {connection.url} timed out: {e}")
            raise ConnectionTimeoutError(f"The request timed out with message: {e}") from e
        except requests.RequestException as e:
            logger.warning(f"Request to {connection.url} failed: {e}")
            raise NetworkTransportError(f"The request failed with message: {e}") from e

    @abstractmethod
    def build_response(self) -> Response:
        """Create the empty response populated by perform()."""

    # -- results --------------------------------------------------------------

    @property
    def response(self) -> Optional[Response]:
        return self._response

    @property
    def effective_status(self) -> Optional[str]:
        return self._effective_status

    @property
    def effective_endpoint(self) -> Optional[str]:
        return self._effective_endpoint

    @property
    def effective_raw_header(self) -> Optional[str]:
        return self._effective_raw_header

    @property
    def effective_headers(self) -> list[Header]:
        return list(self._effective_headers)

    def _reset_result(self) -> None:
        self._response: Optional[Response] = None
        self._effective_status: Optional[str] = None
        self._effective_endpoint: Optional[str] = None
        self._effective_raw_header: Optional[str] = None
        self._effective_headers: list[Header] = []

    def _set_effective_properties(self, connection: Connection) -> None:
        self._effective_endpoint = connection.effective_url
        self._effective_raw_header = connection.effective_header_out
        self._effective_status, self._effective_headers = parse_header_block(self._effective_raw_header)
