"""Document paths and records for the hierarchical store."""

from dataclasses import dataclass
from datetime import datetime

from pantry_service.domain.errors import InvalidArgumentError

USERS = "users"
PANTRY = "pantry"
SHOPPING_LISTS = "shoppingLists"


class _ServerTimestamp:
    """Placeholder resolved to the commit time by the store."""

    _instance: "_ServerTimestamp | None" = None

    def __new__(cls) -> "_ServerTimestamp":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"


SERVER_TIMESTAMP = _ServerTimestamp()


@dataclass(frozen=True)
class Document:
    """A stored document and its field data."""

    path: str
    data: dict[str, object]
    version: int

    @property
    def id(self) -> str:
        """Return the last path segment."""
        return self.path.rsplit("/", 1)[-1]


def user_path(user_id: str) -> str:
    """Return the profile document path for a user."""
    return f"{USERS}/{_segment(user_id)}"


def pantry_collection(user_id: str) -> str:
    """Return the pantry collection path for a user."""
    return f"{user_path(user_id)}/{PANTRY}"


def pantry_item_path(user_id: str, item_id: str) -> str:
    """Return the path of a single pantry item."""
    return f"{pantry_collection(user_id)}/{_segment(item_id)}"


def shopping_lists_collection(user_id: str) -> str:
    """Return the shopping lists collection path for a user."""
    return f"{user_path(user_id)}/{SHOPPING_LISTS}"


def shopping_list_path(user_id: str, list_id: str) -> str:
    """Return the path of a single shopping list."""
    return f"{shopping_lists_collection(user_id)}/{_segment(list_id)}"


def parse_timestamp(raw: object) -> datetime | None:
    """Parse a stored timestamp value."""
    if isinstance(raw, datetime):
        return raw
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw)
    return None


def _segment(value: str) -> str:
    if not value or "/" in value:
        raise InvalidArgumentError(f"Invalid document id: {value!r}")
    return value
