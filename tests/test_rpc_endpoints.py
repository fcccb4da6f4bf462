"""Tests for the RPC gateway."""

import pytest
from fastapi.testclient import TestClient

from pantry_service.api.app import create_app
from pantry_service.containers import AppContainer
from pantry_service.domain.documents import pantry_item_path, shopping_list_path
from tests.conftest import InMemoryDocumentStore

AUTH = {"Authorization": "Bearer token-alice"}


@pytest.fixture
def client(container: AppContainer) -> TestClient:
    return TestClient(create_app(container))


def _call(client: TestClient, name: str, data: dict[str, object], headers=AUTH):
    return client.post(f"/rpc/{name}", json={"data": data}, headers=headers)


def test_add_pantry_item_returns_id_with_defaults(
    client: TestClient, document_store: InMemoryDocumentStore
) -> None:
    response = _call(client, "addPantryItem", {"name": "Rice"})

    assert response.status_code == 200
    item_id = response.json()["result"]["pantryItemId"]
    data = document_store.data(pantry_item_path("alice", item_id))
    assert data["name"] == "Rice"
    assert data["calories"] == 0
    assert data["servings"] == 1
    assert data["likability"] == 0
    assert data["macros"] == {}


def test_add_pantry_item_without_name(client: TestClient) -> None:
    response = _call(client, "addPantryItem", {"calories": 10})

    assert response.status_code == 400
    assert response.json()["error"]["status"] == "INVALID_ARGUMENT"


def test_update_pantry_item_partial(
    client: TestClient, document_store: InMemoryDocumentStore
) -> None:
    item_id = _call(
        client, "addPantryItem", {"name": "Oats", "servings": 3, "likability": 2}
    ).json()["result"]["pantryItemId"]

    response = _call(
        client,
        "updatePantryItem",
        {"pantryItemId": item_id, "fieldsToUpdate": {"calories": 200}},
    )

    assert response.status_code == 200
    assert response.json() == {"result": {"success": True}}
    data = document_store.data(pantry_item_path("alice", item_id))
    assert data["calories"] == 200
    assert data["servings"] == 3
    assert data["likability"] == 2
    assert data["name"] == "Oats"


def test_update_pantry_item_missing_arguments(
    client: TestClient, document_store: InMemoryDocumentStore
) -> None:
    response = _call(client, "updatePantryItem", {"fieldsToUpdate": {}})

    assert response.status_code == 400
    assert response.json()["error"] == {
        "status": "INVALID_ARGUMENT",
        "message": "Missing arguments",
    }
    assert document_store.calls == []


def test_update_pantry_item_not_found(client: TestClient) -> None:
    response = _call(
        client,
        "updatePantryItem",
        {"pantryItemId": "missing", "fieldsToUpdate": {"calories": 1}},
    )

    assert response.status_code == 404
    assert response.json()["error"]["status"] == "NOT_FOUND"


def test_shopping_list_flow(
    client: TestClient, document_store: InMemoryDocumentStore
) -> None:
    list_id = _call(client, "createShoppingList", {"store": "Costco"}).json()[
        "result"
    ]["listId"]
    for name in ("Milk", "Milk", "Eggs"):
        response = _call(
            client, "addItemToShoppingList", {"listId": list_id, "itemName": name}
        )
        assert response.json() == {"result": {"success": True}}

    response = _call(
        client, "removeItemFromShoppingList", {"listId": list_id, "itemName": "Milk"}
    )

    assert response.status_code == 200
    data = document_store.data(shopping_list_path("alice", list_id))
    assert data["title"] == "My Shopping List"
    assert data["store"] == "Costco"
    assert [entry["itemName"] for entry in data["items"]] == ["Eggs"]
    assert data["items"][0]["quantity"] == 1


def test_add_item_to_shopping_list_missing_item_name(
    client: TestClient, document_store: InMemoryDocumentStore
) -> None:
    list_id = _call(client, "createShoppingList", {}).json()["result"]["listId"]
    before = dict(document_store.documents)

    response = _call(client, "addItemToShoppingList", {"listId": list_id})

    assert response.status_code == 400
    assert response.json()["error"]["message"] == "Missing listId or itemName"
    assert document_store.documents == before


def test_remove_item_from_missing_list(
    client: TestClient, document_store: InMemoryDocumentStore
) -> None:
    response = _call(
        client,
        "removeItemFromShoppingList",
        {"listId": "nonexistent-list", "itemName": "Milk"},
    )

    assert response.status_code == 404
    assert response.json()["error"] == {
        "status": "NOT_FOUND",
        "message": "List not found",
    }
    assert document_store.documents == {}


def test_malformed_payload_is_invalid_argument(client: TestClient) -> None:
    response = _call(client, "addPantryItem", {"name": "Rice", "calories": "lots"})

    assert response.status_code == 400
    assert response.json()["error"]["status"] == "INVALID_ARGUMENT"


@pytest.mark.parametrize(
    "name",
    [
        "addPantryItem",
        "updatePantryItem",
        "createShoppingList",
        "addItemToShoppingList",
        "removeItemFromShoppingList",
    ],
)
@pytest.mark.parametrize(
    "headers",
    [{}, {"Authorization": "Bearer unknown"}, {"Authorization": "Basic abc"}],
)
def test_unauthenticated_calls_never_touch_store(
    client: TestClient,
    document_store: InMemoryDocumentStore,
    name: str,
    headers: dict[str, str],
) -> None:
    response = _call(client, name, {"name": "Rice"}, headers=headers)

    assert response.status_code == 401
    assert response.json()["error"]["status"] == "UNAUTHENTICATED"
    assert document_store.calls == []


def test_store_failure_is_internal(
    client: TestClient,
    document_store: InMemoryDocumentStore,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def broken_add(*_args, **_kwargs):
        raise ConnectionError("store unavailable")

    monkeypatch.setattr(document_store, "add", broken_add)

    response = _call(client, "createShoppingList", {})

    assert response.status_code == 500
    assert response.json()["error"] == {
        "status": "INTERNAL",
        "message": "Internal error",
    }


def test_non_utf8_body_is_invalid_argument(
    client: TestClient, document_store: InMemoryDocumentStore
) -> None:
    response = client.post(
        "/rpc/addPantryItem",
        content=b'{"data": {"name": "\xff"}}',
        headers={**AUTH, "Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["error"]["status"] == "INVALID_ARGUMENT"
    assert document_store.calls == []


def test_integer_amounts_stay_integers(
    client: TestClient, document_store: InMemoryDocumentStore
) -> None:
    item_id = _call(client, "addPantryItem", {"name": "Rice", "calories": 130}).json()[
        "result"
    ]["pantryItemId"]
    list_id = _call(client, "createShoppingList", {}).json()["result"]["listId"]
    _call(
        client,
        "addItemToShoppingList",
        {"listId": list_id, "itemName": "Eggs", "quantity": 12},
    )

    pantry = document_store.data(pantry_item_path("alice", item_id))
    items = document_store.data(shopping_list_path("alice", list_id))["items"]
    assert type(pantry["calories"]) is int
    assert type(items[0]["quantity"]) is int
    assert items[0]["quantity"] == 12


def test_health(client: TestClient) -> None:
    assert client.get("/health").json() == {"status": "ok"}
