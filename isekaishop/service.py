"""Business logic for browsing the item shop."""

from __future__ import annotations

from typing import Protocol, Sequence

from .entities import Item
from .models import ItemFilter, ItemResult, PaginateResult


class _ItemRepository(Protocol):
    def listing(self, item_filter: ItemFilter) -> Sequence[Item]: ...

    def counting(self, item_filter: ItemFilter) -> int: ...


def total_pages(total_items: int, size: int) -> int:
    """Return how many pages of ``size`` items hold ``total_items``."""
    pages, remainder = divmod(total_items, size)
    return pages + 1 if remainder else pages


class ItemShopService:
    """Lists items on sale, one page at a time."""

    def __init__(self, repository: _ItemRepository) -> None:
        self._repository = repository

    def listing(self, item_filter: ItemFilter) -> ItemResult:
        """Return the requested page of items and the page count."""
        items = self._repository.listing(item_filter)
        count = self._repository.counting(item_filter)
        return ItemResult(
            items=[item.to_item_model() for item in items],
            paginate=PaginateResult(
                page=item_filter.paginate.page,
                total_page=total_pages(count, item_filter.paginate.size),
            ),
        )