"""Pydantic models for RPC payloads."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RpcPayload(BaseModel):
    """Base for callable payloads using camelCase keys."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class AddPantryItemPayload(RpcPayload):
    """Payload for addPantryItem."""

    name: str | None = None
    calories: int | float | None = None
    macros: dict[str, int | float] | None = None
    servings: int | float | None = None
    likability: int | float | None = None


class UpdatePantryItemPayload(RpcPayload):
    """Payload for updatePantryItem."""

    pantry_item_id: str | None = Field(default=None, alias="pantryItemId")
    fields_to_update: dict[str, Any] | None = Field(
        default=None, alias="fieldsToUpdate"
    )


class CreateShoppingListPayload(RpcPayload):
    """Payload for createShoppingList."""

    title: str | None = None
    store: str | None = None


class AddShoppingListItemPayload(RpcPayload):
    """Payload for addItemToShoppingList."""

    list_id: str | None = Field(default=None, alias="listId")
    item_name: str | None = Field(default=None, alias="itemName")
    quantity: int | float | None = None


class RemoveShoppingListItemPayload(RpcPayload):
    """Payload for removeItemFromShoppingList."""

    list_id: str | None = Field(default=None, alias="listId")
    item_name: str | None = Field(default=None, alias="itemName")


class IdentityRecord(BaseModel):
    """Identity row carried by an auth webhook."""

    id: str
    email: str | None = None


class IdentityWebhookPayload(BaseModel):
    """Database webhook body emitted when an identity row changes."""

    type: str
    table: str | None = None
    db_schema: str | None = Field(default=None, alias="schema")
    record: IdentityRecord | None = None
