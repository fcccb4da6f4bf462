"""Supabase implementation of the document store."""

from dataclasses import dataclass
from uuid import uuid4

from postgrest.exceptions import APIError
from supabase import Client

from pantry_service.domain.documents import SERVER_TIMESTAMP, Document
from pantry_service.domain.errors import ConflictError, NotFoundError
from pantry_service.services.documents import DocumentStore

SERVER_TIMESTAMP_MARKER = {"$serverTimestamp": True}

# SQLSTATE codes raised by the document functions in supabase/migrations.
_NOT_FOUND_CODE = "P0002"
_CONFLICT_CODE = "40001"


@dataclass
class SupabaseDocumentStore(DocumentStore):
    """Documents stored as jsonb rows keyed by path.

    Writes go through Postgres functions so each mutation is a single
    statement and server timestamps come from the database clock.
    """

    client: Client

    def get(self, path: str) -> Document | None:
        """Return the document at path, if present."""
        response = (
            self.client.table("documents")
            .select("path, data, version")
            .eq("path", path)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_document(response.data[0])

    def add(self, collection_path: str, fields: dict[str, object]) -> Document:
        """Create a document under a new id in the collection."""
        path = f"{collection_path}/{uuid4().hex}"
        row = self._call_one(
            "document_create", {"p_path": path, "p_data": _encode(fields)}
        )
        if not row.get("created"):
            raise RuntimeError(f"Document id collision at {path}")
        return _parse_document(row)

    def create(self, path: str, fields: dict[str, object]) -> bool:
        """Insert the document unless it already exists."""
        row = self._call_one(
            "document_create", {"p_path": path, "p_data": _encode(fields)}
        )
        return bool(row.get("created"))

    def set(self, path: str, fields: dict[str, object], merge: bool = False) -> None:
        """Overwrite or merge a document, creating it when absent."""
        self._call_one(
            "document_set",
            {"p_path": path, "p_data": _encode(fields), "p_merge": merge},
        )

    def update(self, path: str, fields: dict[str, object]) -> Document:
        """Merge fields into an existing document."""
        row = self._call_one(
            "document_update", {"p_path": path, "p_data": _encode(fields)}
        )
        return _parse_document(row)

    def array_append(self, path: str, field: str, entry: object) -> Document:
        """Append an element to an array field in one statement."""
        row = self._call_one(
            "document_array_append",
            {"p_path": path, "p_field": field, "p_entry": _encode(entry)},
        )
        return _parse_document(row)

    def array_replace(
        self,
        path: str,
        field: str,
        values: list[object],
        expected_version: int | None = None,
    ) -> Document:
        """Replace an array field, optionally guarded by a version."""
        row = self._call_one(
            "document_array_replace",
            {
                "p_path": path,
                "p_field": field,
                "p_values": _encode(values),
                "p_expected_version": expected_version,
            },
        )
        return _parse_document(row)

    def _call_one(self, function: str, params: dict[str, object]) -> dict[str, object]:
        try:
            response = self.client.rpc(function, params).execute()
        except APIError as exc:
            if exc.code == _NOT_FOUND_CODE:
                raise NotFoundError(f"Document not found: {params['p_path']}") from exc
            if exc.code == _CONFLICT_CODE:
                raise ConflictError(
                    f"Document changed concurrently: {params['p_path']}"
                ) from exc
            raise
        if not response.data:
            raise RuntimeError(f"{function} returned no rows")
        return response.data[0]


def _encode(value: object) -> object:
    """Convert a field value into JSON, marking server timestamps."""
    if value is SERVER_TIMESTAMP:
        return dict(SERVER_TIMESTAMP_MARKER)
    if isinstance(value, dict):
        return {str(key): _encode(item) for key, item in value.items()}
    if isinstance(value, list | tuple):
        return [_encode(item) for item in value]
    return value


def _parse_document(row: dict[str, object]) -> Document:
    """Parse a documents row into a domain model."""
    data = row.get("data")
    return Document(
        path=str(row["path"]),
        data=dict(data) if isinstance(data, dict) else {},
        version=int(row.get("version", 0)),
    )
