"""Shopping list operations."""

import logging
from dataclasses import dataclass

from pantry_service.domain.documents import (
    SERVER_TIMESTAMP,
    shopping_list_path,
    shopping_lists_collection,
)
from pantry_service.domain.errors import (
    ConflictError,
    InvalidArgumentError,
    NotFoundError,
)
from pantry_service.domain.shopping import (
    NewShoppingList,
    ShoppingList,
    parse_shopping_list,
)
from pantry_service.services.documents import DocumentStore

logger = logging.getLogger(__name__)

ITEMS_FIELD = "items"


@dataclass
class ShoppingListService:
    """Application service for a user's shopping lists."""

    store: DocumentStore
    remove_max_attempts: int = 5

    def __post_init__(self) -> None:
        if self.remove_max_attempts < 1:
            raise ValueError("remove_max_attempts must be at least 1")

    def create_list(self, user_id: str, options: NewShoppingList) -> ShoppingList:
        """Create an empty shopping list."""
        document = self.store.add(
            shopping_lists_collection(user_id),
            {
                "title": options.title,
                "store": options.store or None,
                "createdAt": SERVER_TIMESTAMP,
                ITEMS_FIELD: [],
            },
        )
        logger.info("Shopping list %s created for %s", document.id, user_id)
        return parse_shopping_list(document)

    def add_item(
        self, user_id: str, list_id: str, item_name: str, quantity: float = 1
    ) -> None:
        """Append an entry; repeated names produce separate entries."""
        if not list_id or not item_name:
            raise InvalidArgumentError("Missing listId or itemName")
        if isinstance(quantity, bool) or not isinstance(quantity, int | float):
            raise InvalidArgumentError("quantity must be a number")
        try:
            self.store.array_append(
                shopping_list_path(user_id, list_id),
                ITEMS_FIELD,
                {
                    "itemName": item_name,
                    "quantity": quantity,
                    "addedAt": SERVER_TIMESTAMP,
                },
            )
        except NotFoundError:
            raise NotFoundError("List not found") from None

    def remove_item(self, user_id: str, list_id: str, item_name: str) -> None:
        """Remove every entry whose itemName equals item_name exactly.

        The rewrite is guarded by the version that was read, so an entry
        appended concurrently is never overwritten; the read is retried
        instead.
        """
        if not list_id or not item_name:
            raise InvalidArgumentError("Missing arguments")
        path = shopping_list_path(user_id, list_id)
        for attempt in range(1, self.remove_max_attempts + 1):
            document = self.store.get(path)
            if document is None:
                raise NotFoundError("List not found")
            items = document.data.get(ITEMS_FIELD) or []
            remaining = [
                entry
                for entry in items
                if not (isinstance(entry, dict) and entry.get("itemName") == item_name)
            ]
            try:
                self.store.array_replace(
                    path, ITEMS_FIELD, remaining, expected_version=document.version
                )
            except ConflictError:
                logger.info(
                    "List %s changed during removal (attempt %s)", list_id, attempt
                )
                continue
            except NotFoundError:
                raise NotFoundError("List not found") from None
            return
        raise ConflictError(
            f"List {list_id} kept changing; gave up after "
            f"{self.remove_max_attempts} attempts"
        )
