"""Concrete request types."""

from __future__ import annotations

from typing import Optional

from requests.adapters import BaseAdapter

from ..message.header import Header
from ..message.message import Message
from ..models.config import ClientConfig
from ..response import JsonResponse, Response
from .base import AbstractRequest


class Request(AbstractRequest):
    """Request producing a plain Response with a decoded text body."""

    def build_response(self) -> Response:
        return Response()


class JsonRequest(AbstractRequest):
    """
    Request producing a JsonResponse.

    Starts out with a message asking for a JSON representation; a message
    set later replaces it.
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        adapter: Optional[BaseAdapter] = None,
    ) -> None:
        super().__init__(config=config, adapter=adapter)
        self.message = Message().add_header(Header("Accept", ["application/json"]))

    def build_response(self) -> JsonResponse:
        return JsonResponse()
