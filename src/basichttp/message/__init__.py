"""Outgoing message building blocks."""

from .body import BinaryBody, Body, FormBody, JsonBody, StringBody
from .header import Header, parse_header_block
from .message import Message

__all__ = [
    "BinaryBody",
    "Body",
    "FormBody",
    "Header",
    "JsonBody",
    "Message",
    "StringBody",
    "parse_header_block",
]
