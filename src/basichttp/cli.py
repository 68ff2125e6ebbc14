"""Command-line interface for basichttp."""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from . import __version__
from .authentication import BasicAuthentication, BearerAuthentication, ClientCertificateAuthentication
from .exceptions import HttpClientError
from .logging_config import setup_logging
from .message import FormBody, Header, JsonBody, Message, StringBody
from .models.config import ClientConfig, expand_env_var
from .request import AbstractRequest, JsonRequest, Request, RequestMethod
from .response import JsonResponse
from .transport import HttpsTransport, HttpTransport
from .util.url import UrlUtil


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog="basichttp",
        description="Perform a single HTTP request and show what was sent and received",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Simple GET, showing the request headers that went out
  basichttp https://example.com --show-request

  # POST a JSON document with a bearer token
  basichttp -X POST https://api.example.com/items --json '{"name": "x"}' --bearer '$TOKEN'

  # Query parameters and custom headers
  basichttp https://example.com/search -q term=python -H "Accept: text/html"
        """,
    )

    parser.add_argument("url", help="Absolute URL to request")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--request",
        "-X",
        dest="method",
        default="GET",
        type=str.upper,
        choices=[method.value for method in RequestMethod],
        help="Request method (default: GET)",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="YAML file with client configuration",
    )

    # Message
    message_group = parser.add_argument_group("message")
    message_group.add_argument(
        "--header",
        "-H",
        action="append",
        default=[],
        metavar="'NAME: VALUE'",
        help="Add a request header (repeatable)",
    )
    message_group.add_argument(
        "--query",
        "-q",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Add a query parameter (repeatable)",
    )
    body_group = message_group.add_mutually_exclusive_group()
    body_group.add_argument("--data", "-d", default=None, help="Send a text body")
    body_group.add_argument("--json", dest="json_data", default=None, help="Send a JSON body")
    body_group.add_argument(
        "--form",
        "-F",
        action="append",
        default=None,
        metavar="NAME=VALUE",
        help="Send a url-encoded form field (repeatable)",
    )

    # Authentication
    auth_group = parser.add_argument_group("authentication")
    auth_group.add_argument("--basic", metavar="USER:PASSWORD", default=None, help="HTTP basic credentials")
    auth_group.add_argument("--bearer", metavar="TOKEN", default=None, help="Bearer token")
    auth_group.add_argument("--cert", default=None, help="TLS client certificate file")
    auth_group.add_argument("--key", default=None, help="TLS client key file")

    # Transport
    transport_group = parser.add_argument_group("transport")
    transport_group.add_argument("--port", type=int, default=None, help="Override the URL port")
    transport_group.add_argument("--timeout", type=float, default=None, help="Total timeout in seconds")
    transport_group.add_argument("--user-agent", "-A", default=None, help="Custom User-Agent header")
    transport_group.add_argument(
        "--insecure",
        "-k",
        action="store_true",
        help="Skip TLS certificate verification",
    )
    transport_group.add_argument("--ca-bundle", type=Path, default=None, help="CA bundle for TLS verification")

    # Output
    output_group = parser.add_argument_group("output")
    output_group.add_argument(
        "--show-request",
        "-i",
        action="store_true",
        help="Print the effective request header block",
    )
    output_group.add_argument(
        "--json-response",
        action="store_true",
        help="Parse and pretty-print the response body as JSON",
    )
    output_group.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    output_group.add_argument("--quiet", action="store_true", help="Only print the response body")

    return parser


def _split_pair(value: str, separator: str, what: str) -> tuple[str, str]:
    name, found, rest = value.partition(separator)
    if not found or not name.strip():
        raise ValueError(f"Invalid {what} {value!r}, expected NAME{separator}VALUE")
    return name.strip(), rest


def load_config(args: argparse.Namespace) -> ClientConfig:
    """Build the client configuration from an optional file and CLI overrides."""
    config = ClientConfig.from_yaml_file(args.config) if args.config else ClientConfig()
    overrides: dict = {}
    if args.user_agent:
        overrides["user_agent"] = args.user_agent
    if args.insecure:
        overrides["verify_peer"] = False
    if args.ca_bundle:
        overrides["ca_bundle"] = args.ca_bundle
    if args.verbose:
        overrides["log_level"] = "DEBUG"
    elif args.quiet:
        overrides["log_level"] = "ERROR"
    if overrides:
        config = ClientConfig.model_validate({**config.model_dump(), **overrides})
    return config


def build_message(args: argparse.Namespace) -> Message:
    """Translate header and body arguments into a Message."""
    message = Message()
    for raw in args.header:
        name, value = _split_pair(raw, ":", "header")
        message.add_header(Header(name, [value.strip()]))

    if args.data is not None:
        message.set_body(StringBody(args.data))
    elif args.json_data is not None:
        message.set_body(JsonBody(json.loads(args.json_data)))
    elif args.form:
        message.set_body(FormBody(dict(_split_pair(field, "=", "form field") for field in args.form)))
    return message


def build_request(args: argparse.Namespace, config: ClientConfig) -> AbstractRequest:
    """Assemble a request from parsed arguments."""
    request: AbstractRequest = JsonRequest(config=config) if args.json_response else Request(config=config)
    request.endpoint = args.url
    request.method = args.method

    message = build_message(args)
    if args.json_response and not message.has_header("Accept"):
        message.add_header(Header("Accept", ["application/json"]))
    request.message = message

    for raw in args.query:
        request.add_query_parameter(*_split_pair(raw, "=", "query parameter"))
    if args.port is not None:
        request.port = args.port

    if UrlUtil().get_scheme(args.url) == "HTTPS":
        transport = HttpsTransport.from_config(config)
        transport.timeout = args.timeout
        request.transport = transport
    else:
        request.transport = HttpTransport(timeout=args.timeout)

    if args.basic:
        username, _, password = args.basic.partition(":")
        request.add_authentication(BasicAuthentication(username, expand_env_var(password) or ""))
    if args.bearer:
        request.add_authentication(BearerAuthentication(expand_env_var(args.bearer) or ""))
    if args.cert:
        request.add_authentication(ClientCertificateAuthentication(args.cert, args.key))
    return request


def print_result(request: AbstractRequest, args: argparse.Namespace, console: Console) -> None:
    """Print the effective request and the response."""
    response = request.response
    if response is None:
        return

    if not args.quiet:
        if args.show_request and request.effective_raw_header:
            console.print(f"[dim]> {escape(request.effective_endpoint or '')}[/dim]", soft_wrap=True)
            for line in request.effective_raw_header.rstrip("\r\n").split("\r\n"):
                console.print(f"> {line}", markup=False, highlight=False, soft_wrap=True)
            console.print()

        style = "green" if response.status_code is not None and response.status_code < 400 else "red"
        console.print(response.status_line or "", style=f"bold {style}", markup=False)
        for header in response.headers:
            console.print(
                f"{header.name}: {header.values_as_string()}", markup=False, highlight=False, soft_wrap=True
            )
        console.print()

    if isinstance(response, JsonResponse):
        if response.body is not None:
            console.print_json(data=response.body)
    elif isinstance(response.body, bytes):
        if response.body:
            console.print(f"[{len(response.body)} bytes of binary data]", markup=False, highlight=False)
    elif response.body:
        console.print(response.body, markup=False, highlight=False, soft_wrap=True)


def run_request(args: argparse.Namespace) -> int:
    """Perform the request described by the arguments."""
    console = Console()
    error_console = Console(stderr=True)

    try:
        config = load_config(args)
    except (OSError, ValueError, ValidationError, yaml.YAMLError) as e:
        error_console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        return 1

    setup_logging(level=config.log_level, log_file=config.log_file, force=True)

    try:
        request = build_request(args, config)
        request.perform()
    except (HttpClientError, ValueError) as e:
        error_console.print(f"[red]Error:[/red] {escape(str(e))}", soft_wrap=True)
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1

    print_result(request, args, console)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    return run_request(args)


if __name__ == "__main__":
    sys.exit(main())
