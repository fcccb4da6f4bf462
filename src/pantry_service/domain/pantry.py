"""Domain models for pantry items."""

from dataclasses import dataclass, field

from pantry_service.domain.documents import Document

PANTRY_ITEM_FIELDS = frozenset({"name", "calories", "servings", "likability", "macros"})


@dataclass(frozen=True)
class NewPantryItem:
    """Options for adding a pantry item, with their defaults."""

    name: str
    calories: float = 0
    servings: float = 1
    likability: float = 0
    macros: dict[str, float] = field(default_factory=dict)

    def to_fields(self) -> dict[str, object]:
        """Return the document fields for a new item."""
        return {
            "name": self.name,
            "calories": self.calories,
            "servings": self.servings,
            "likability": self.likability,
            "macros": dict(self.macros),
        }


@dataclass(frozen=True)
class PantryItem:
    """Represents a pantry item stored under a user."""

    id: str
    name: str
    calories: float
    servings: float
    likability: float
    macros: dict[str, float]


def parse_pantry_item(document: Document) -> PantryItem:
    """Parse a pantry document into a domain model."""
    data = document.data
    macros = data.get("macros")
    return PantryItem(
        id=document.id,
        name=str(data.get("name", "")),
        calories=data.get("calories", 0),
        servings=data.get("servings", 1),
        likability=data.get("likability", 0),
        macros=dict(macros) if isinstance(macros, dict) else {},
    )
