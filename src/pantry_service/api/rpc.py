"""Callable RPC endpoints for pantry and shopping list operations."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, TypeVar

import httpx
from fastapi import APIRouter, Depends, Header, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from pantry_service.api.rpc_models import (
    AddPantryItemPayload,
    AddShoppingListItemPayload,
    CreateShoppingListPayload,
    RemoveShoppingListItemPayload,
    UpdatePantryItemPayload,
)
from pantry_service.domain.errors import (
    InternalError,
    InvalidArgumentError,
    ServiceError,
)
from pantry_service.domain.pantry import NewPantryItem
from pantry_service.domain.profiles import Identity
from pantry_service.domain.shopping import NewShoppingList
from pantry_service.services.identity import authenticate

if TYPE_CHECKING:
    from pantry_service.containers import AppContainer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/rpc", tags=["rpc"])

ERROR_STATUS_CODES = {
    "UNAUTHENTICATED": 401,
    "INVALID_ARGUMENT": 400,
    "NOT_FOUND": 404,
    "INTERNAL": 500,
}

PayloadT = TypeVar("PayloadT", bound=BaseModel)


async def service_error_handler(_request: Request, exc: ServiceError) -> JSONResponse:
    """Render a ServiceError in the callable error envelope."""
    message = "Internal error" if exc.kind == "INTERNAL" else exc.message
    return JSONResponse(
        status_code=ERROR_STATUS_CODES.get(exc.kind, 500),
        content={"error": {"status": exc.kind, "message": message}},
    )


def _container(request: Request) -> AppContainer:
    return request.app.state.container


async def require_identity(
    request: Request, authorization: str | None = Header(default=None)
) -> Identity:
    """Resolve the caller identity before any payload is read."""
    client = _container(request).identity_client
    try:
        return await authenticate(client, authorization)
    except httpx.HTTPError as exc:
        logger.exception("Identity lookup failed")
        raise InternalError("Identity lookup failed") from exc


async def _read_payload(request: Request, model: type[PayloadT]) -> PayloadT:
    try:
        body = await request.json()
    except ValueError:
        raise InvalidArgumentError("Request body must be JSON") from None
    data = body.get("data") if isinstance(body, dict) else None
    try:
        return model.model_validate(data if data is not None else {})
    except ValidationError as exc:
        raise InvalidArgumentError(_describe(exc)) from None


def _describe(exc: ValidationError) -> str:
    problems = [
        f"{'.'.join(str(part) for part in error['loc']) or 'data'}: {error['msg']}"
        for error in exc.errors()
    ]
    return "; ".join(problems)


def _run(operation: str, call: Callable[[], dict[str, object]]) -> dict[str, object]:
    try:
        return {"result": call()}
    except ServiceError:
        raise
    except Exception as exc:
        logger.exception("Unhandled failure in %s", operation)
        raise InternalError(str(exc)) from exc


@router.post("/addPantryItem")
async def add_pantry_item(
    request: Request, identity: Identity = Depends(require_identity)
) -> dict[str, object]:
    """Add an item to the caller's pantry."""
    payload = await _read_payload(request, AddPantryItemPayload)
    options = payload.model_dump(exclude_none=True)
    if not options.get("name"):
        raise InvalidArgumentError("Missing name")
    service = _container(request).pantry_service

    def call() -> dict[str, object]:
        item = service.add_item(identity.id, NewPantryItem(**options))
        return {"pantryItemId": item.id}

    return _run("addPantryItem", call)


@router.post("/updatePantryItem")
async def update_pantry_item(
    request: Request, identity: Identity = Depends(require_identity)
) -> dict[str, object]:
    """Apply a partial update to one of the caller's pantry items."""
    payload = await _read_payload(request, UpdatePantryItemPayload)
    if not payload.pantry_item_id or not payload.fields_to_update:
        raise InvalidArgumentError("Missing arguments")
    service = _container(request).pantry_service

    def call() -> dict[str, object]:
        service.update_item(
            identity.id, payload.pantry_item_id, payload.fields_to_update
        )
        return {"success": True}

    return _run("updatePantryItem", call)


@router.post("/createShoppingList")
async def create_shopping_list(
    request: Request, identity: Identity = Depends(require_identity)
) -> dict[str, object]:
    """Create a shopping list for the caller."""
    payload = await _read_payload(request, CreateShoppingListPayload)
    options = NewShoppingList(**payload.model_dump(exclude_none=True))
    service = _container(request).shopping_list_service
    return _run(
        "createShoppingList",
        lambda: {"listId": service.create_list(identity.id, options).id},
    )


@router.post("/addItemToShoppingList")
async def add_item_to_shopping_list(
    request: Request, identity: Identity = Depends(require_identity)
) -> dict[str, object]:
    """Append an item to one of the caller's shopping lists."""
    payload = await _read_payload(request, AddShoppingListItemPayload)
    if not payload.list_id or not payload.item_name:
        raise InvalidArgumentError("Missing listId or itemName")
    service = _container(request).shopping_list_service
    quantity = payload.quantity if payload.quantity is not None else 1

    def call() -> dict[str, object]:
        service.add_item(identity.id, payload.list_id, payload.item_name, quantity)
        return {"success": True}

    return _run("addItemToShoppingList", call)


@router.post("/removeItemFromShoppingList")
async def remove_item_from_shopping_list(
    request: Request, identity: Identity = Depends(require_identity)
) -> dict[str, object]:
    """Remove every entry with the given name from a shopping list."""
    payload = await _read_payload(request, RemoveShoppingListItemPayload)
    if not payload.list_id or not payload.item_name:
        raise InvalidArgumentError("Missing arguments")
    service = _container(request).shopping_list_service

    def call() -> dict[str, object]:
        service.remove_item(identity.id, payload.list_id, payload.item_name)
        return {"success": True}

    return _run("removeItemFromShoppingList", call)
