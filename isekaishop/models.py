"""Request and response models of the item shop."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Mapping

_INT_PATTERN = re.compile(r"[+-]?\d+")


class ValidationError(ValueError):
    """Raised when a request model fails validation."""


def _failure(namespace: str, name: str, tag: str) -> str:
    return f"Key: '{namespace}.{name}' Error:Field validation for '{name}' failed on the '{tag}' tag"


def _check_number(namespace: str, name: str, value: int, minimum: int,
                  maximum: int | None = None) -> list[str]:
    if value == 0:
        return [_failure(namespace, name, "required")]
    if value < minimum:
        return [_failure(namespace, name, "min")]
    if maximum is not None and value > maximum:
        return [_failure(namespace, name, "max")]
    return []


def _lookup(query: Mapping[str, Any], key: str) -> str | None:
    value = query.get(key)
    if value is None:
        value = next((v for k, v in query.items() if str(k).lower() == key), None)
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    return None if value is None else str(value)


def _parse_int(query: Mapping[str, Any], key: str) -> int:
    raw = _lookup(query, key)
    if not raw:
        return 0
    if not _INT_PATTERN.fullmatch(raw) or not -(2**63) <= int(raw) < 2**63:
        raise ValidationError(f"invalid value for {key}: {raw!r}")
    return int(raw)


@dataclass
class Item:
    id: int
    name: str
    description: str
    picture: str
    price: int

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "description": self.description,
                "picture": self.picture, "price": self.price}


@dataclass
class Paginate:
    page: int = 0
    size: int = 0

    def _errors(self, namespace: str) -> list[str]:
        return [*_check_number(namespace, "Page", self.page, 1),
                *_check_number(namespace, "Size", self.size, 1, 20)]

    def validate(self) -> None:
        """Require a page of at least 1 and a size between 1 and 20."""
        errors = self._errors("Paginate")
        if errors:
            raise ValidationError("\n".join(errors))


@dataclass
class ItemFilter:
    name: str = ""
    description: str = ""
    paginate: Paginate = field(default_factory=Paginate)

    def validate(self) -> None:
        """Check text lengths and pagination bounds."""
        errors = [_failure("ItemFilter", label, "max")
                  for label, value, limit in (("Name", self.name, 64),
                                              ("Description", self.description, 128))
                  if len(value) > limit]
        errors += self.paginate._errors("ItemFilter.Paginate")
        if errors:
            raise ValidationError("\n".join(errors))

    @classmethod
    def from_query(cls, query: Mapping[str, Any]) -> ItemFilter:
        """Build a filter from query parameters without validating it."""
        return cls(
            name=_lookup(query, "name") or "",
            description=_lookup(query, "description") or "",
            paginate=Paginate(page=_parse_int(query, "page"), size=_parse_int(query, "size")),
        )


@dataclass
class PaginateResult:
    page: int
    total_page: int

    def to_dict(self) -> dict[str, int]:
        return {"page": self.page, "totalPage": self.total_page}


@dataclass
class ItemResult:
    items: list[Item]
    paginate: PaginateResult

    def to_dict(self) -> dict[str, Any]:
        return {"items": [item.to_dict() for item in self.items],
                "paginate": self.paginate.to_dict()}