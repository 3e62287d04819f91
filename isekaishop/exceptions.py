"""Errors raised by the item shop."""


class ItemShopError(Exception):
    """Base class for item shop failures."""

    default_message = "Item shop failure"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class ItemListingError(ItemShopError):
    """Listing items from storage failed."""

    default_message = "Failed to list items"


class ItemCountingError(ItemShopError):
    """Counting items in storage failed."""

    default_message = "Counting Items Failed"