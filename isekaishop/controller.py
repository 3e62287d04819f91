"""HTTP handlers for the item shop."""

from __future__ import annotations

import json
from typing import Any, Mapping, Protocol

from flask import Response, request

from .exceptions import ItemShopError
from .models import ItemFilter, ItemResult, ValidationError


class _ItemService(Protocol):
    def listing(self, item_filter: ItemFilter) -> ItemResult: ...


def _json_response(status_code: int, payload: Any) -> Response:
    return Response(json.dumps(payload), status=status_code, mimetype="application/json")


def error_response(status_code: int, message: str) -> Response:
    """Return a JSON error body of the form ``{"message": ...}``."""
    return _json_response(status_code, {"message": message})


def bind_item_filter(query: Mapping[str, Any]) -> ItemFilter:
    """Build an item filter from query parameters and validate it.

    Raises :class:`ValidationError` when a value cannot be parsed or breaks
    the filter's rules.
    """
    item_filter = ItemFilter.from_query(query)
    item_filter.validate()
    return item_filter


class ItemShopController:
    """Serves the item listing endpoint."""

    def __init__(self, service: _ItemService) -> None:
        self._service = service

    def listing(self) -> Response:
        """Answer a request for one page of items on sale."""
        try:
            item_filter = bind_item_filter(request.args)
        except ValidationError as exc:
            return error_response(400, str(exc))
        try:
            result = self._service.listing(item_filter)
        except ItemShopError as exc:
            return error_response(500, str(exc))
        return _json_response(200, result.to_dict())