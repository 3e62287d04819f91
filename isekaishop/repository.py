"""Storage access for items on sale."""

from __future__ import annotations

import logging
from typing import Callable

from sqlalchemy import Select, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .entities import Item
from .exceptions import ItemCountingError, ItemListingError
from .models import ItemFilter


class ItemShopRepository:
    """Queries the items that are on sale."""

    def __init__(self, session_factory: Callable[[], Session],
                 logger: logging.Logger | None = None) -> None:
        self._session_factory = session_factory
        self._logger = logger or logging.getLogger(__name__)

    @staticmethod
    def _filtered(statement: Select, item_filter: ItemFilter) -> Select:
        statement = statement.where(Item.is_archive.is_(False))
        if item_filter.name:
            statement = statement.where(Item.name.ilike(f"%{item_filter.name}%"))
        if item_filter.description:
            statement = statement.where(Item.description.ilike(f"%{item_filter.description}%"))
        return statement

    def listing(self, item_filter: ItemFilter) -> list[Item]:
        """Return one page of unarchived items matching the filter."""
        size = item_filter.paginate.size
        offset = (item_filter.paginate.page - 1) * size
        statement = self._filtered(select(Item), item_filter).offset(offset).limit(size)
        try:
            with self._session_factory() as session:
                return list(session.scalars(statement))
        except SQLAlchemyError as exc:
            self._logger.error("Failed to list items: %s", exc)
            raise ItemListingError() from exc

    def counting(self, item_filter: ItemFilter) -> int:
        """Return how many unarchived items match the filter."""
        statement = self._filtered(select(func.count()).select_from(Item), item_filter)
        try:
            with self._session_factory() as session:
                return int(session.scalar(statement))
        except SQLAlchemyError as exc:
            self._logger.error("Counting Items Failed: %s", exc)
            raise ItemCountingError() from exc