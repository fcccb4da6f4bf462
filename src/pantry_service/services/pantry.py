"""Pantry item operations."""

import logging
from dataclasses import dataclass

from pantry_service.domain.documents import pantry_collection, pantry_item_path
from pantry_service.domain.errors import InvalidArgumentError, NotFoundError
from pantry_service.domain.pantry import (
    PANTRY_ITEM_FIELDS,
    NewPantryItem,
    PantryItem,
    parse_pantry_item,
)
from pantry_service.services.documents import DocumentStore

logger = logging.getLogger(__name__)


@dataclass
class PantryService:
    """Application service for a user's pantry."""

    store: DocumentStore

    def add_item(self, user_id: str, item: NewPantryItem) -> PantryItem:
        """Add a pantry item; items with the same name are allowed."""
        if not item.name:
            raise InvalidArgumentError("Missing name")
        _check_item_fields(item.to_fields())
        document = self.store.add(pantry_collection(user_id), item.to_fields())
        logger.info("Pantry item %s added for %s", document.id, user_id)
        return parse_pantry_item(document)

    def update_item(
        self, user_id: str, item_id: str, fields: dict[str, object]
    ) -> None:
        """Apply a partial update to an existing pantry item."""
        if not item_id or not fields:
            raise InvalidArgumentError("Missing arguments")
        unknown = set(fields) - PANTRY_ITEM_FIELDS
        if unknown:
            raise InvalidArgumentError(
                f"Unknown pantry fields: {', '.join(sorted(unknown))}"
            )
        _check_item_fields(fields)
        path = pantry_item_path(user_id, item_id)
        try:
            self.store.update(path, fields)
        except NotFoundError:
            raise NotFoundError("Pantry item not found") from None


def _check_item_fields(fields: dict[str, object]) -> None:
    if "name" in fields and not (isinstance(fields["name"], str) and fields["name"]):
        raise InvalidArgumentError("name must be a non-empty string")
    for key in ("calories", "servings"):
        if key in fields and (not _is_number(fields[key]) or fields[key] < 0):
            raise InvalidArgumentError(f"{key} must be a number >= 0")
    if "likability" in fields and not _is_number(fields["likability"]):
        raise InvalidArgumentError("likability must be a number")
    if "macros" in fields:
        macros = fields["macros"]
        if not isinstance(macros, dict) or not all(
            isinstance(key, str) and _is_number(value) for key, value in macros.items()
        ):
            raise InvalidArgumentError("macros must map names to numbers")


def _is_number(value: object) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)
