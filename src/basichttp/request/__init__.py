"""Request types and the perform pipeline."""

from .base import AbstractRequest, RequestMethod, RequestState
from .request import JsonRequest, Request

__all__ = [
    "AbstractRequest",
    "JsonRequest",
    "Request",
    "RequestMethod",
    "RequestState",
]
