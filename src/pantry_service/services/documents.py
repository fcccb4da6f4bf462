"""Document store interface used by the application services."""

from typing import Protocol

from pantry_service.domain.documents import Document


class DocumentStore(Protocol):
    """Typed read/write primitives over a hierarchical document namespace.

    Every operation touches exactly one document and is atomic with respect
    to other operations on that document. ``SERVER_TIMESTAMP`` values in
    written fields are replaced with the commit time by the store.
    """

    def get(self, path: str) -> Document | None:
        """Return the document at path, or None when it does not exist."""

    def add(self, collection_path: str, fields: dict[str, object]) -> Document:
        """Create a document with a store-assigned id in a collection."""

    def create(self, path: str, fields: dict[str, object]) -> bool:
        """Create the document if absent; return False if it already exists."""

    def set(self, path: str, fields: dict[str, object], merge: bool = False) -> None:
        """Write a document, overwriting it or shallow-merging into it."""

    def update(self, path: str, fields: dict[str, object]) -> Document:
        """Change the named fields; raise NotFoundError if absent."""

    def array_append(self, path: str, field: str, entry: object) -> Document:
        """Append one element to an array field; raise NotFoundError if absent."""

    def array_replace(
        self,
        path: str,
        field: str,
        values: list[object],
        expected_version: int | None = None,
    ) -> Document:
        """Replace an array field wholesale.

        Raises NotFoundError if the document is absent and ConflictError when
        ``expected_version`` is given and no longer matches.
        """
