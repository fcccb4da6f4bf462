"""Domain models for shopping lists."""

from dataclasses import dataclass
from datetime import datetime

from pantry_service.domain.documents import Document, parse_timestamp

DEFAULT_LIST_TITLE = "My Shopping List"


@dataclass(frozen=True)
class NewShoppingList:
    """Options for creating a shopping list, with their defaults."""

    title: str = DEFAULT_LIST_TITLE
    store: str | None = None


@dataclass(frozen=True)
class ShoppingListEntry:
    """A single entry in a shopping list's items array."""

    item_name: str
    quantity: float
    added_at: datetime | None


@dataclass(frozen=True)
class ShoppingList:
    """Represents a shopping list stored under a user."""

    id: str
    title: str
    store: str | None
    created_at: datetime | None
    items: list[ShoppingListEntry]


def parse_shopping_list(document: Document) -> ShoppingList:
    """Parse a shopping list document into a domain model."""
    data = document.data
    raw_items = data.get("items")
    return ShoppingList(
        id=document.id,
        title=str(data.get("title", DEFAULT_LIST_TITLE)),
        store=data.get("store"),
        created_at=parse_timestamp(data.get("createdAt")),
        items=[
            ShoppingListEntry(
                item_name=str(entry.get("itemName", "")),
                quantity=entry.get("quantity", 1),
                added_at=parse_timestamp(entry.get("addedAt")),
            )
            for entry in (raw_items if isinstance(raw_items, list) else [])
            if isinstance(entry, dict)
        ],
    )
