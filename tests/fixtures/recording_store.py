"""
DocumentStore double that records every call and fails on demand.
"""
from typing import Any, Sequence

from esfixtures.core.context import ExecutionContext
from esfixtures.data_sources.base import DocumentStore
from esfixtures.models.fixture import Record
from esfixtures.models.store import BulkItemResult, BulkResult


class RecordingDocumentStore(DocumentStore):
    """Keeps collections in memory and logs (operation, collection) pairs."""

    def __init__(self):
        super().__init__()
        self.calls: list[tuple[str, str]] = []
        self.collections: dict[str, dict[str, Any]] = {}
        self.errors: dict[tuple[str, str], Exception] = {}
        self.item_failures: dict[str, list[str]] = {}  # collection -> failure messages
        self.reported_failures: dict[str, int] = {}  # collection -> extra num_failed
        self.contexts: list[ExecutionContext] = []

    def fail(self, operation: str, name: str, error: Exception) -> None:
        self.errors[(operation, name)] = error

    def _enter(self, operation: str, name: str, context: ExecutionContext) -> None:
        self.calls.append((operation, name))
        self.contexts.append(context)
        context.raise_if_done()
        error = self.errors.get((operation, name))
        if error is not None:
            raise error

    def delete_collection(self, name: str, context: ExecutionContext) -> None:
        self._enter("delete", name, context)
        self.collections.pop(name, None)

    def create_collection(
        self,
        name: str,
        mapping: dict[str, Any] | None,
        settings: dict[str, Any] | None,
        context: ExecutionContext
    ) -> None:
        self._enter("create", name, context)
        self.collections[name] = {"mapping": mapping, "settings": settings, "records": []}

    def bulk_write(
        self,
        name: str,
        records: Sequence[Record],
        context: ExecutionContext
    ) -> BulkResult:
        self._enter("bulk_write", name, context)
        self.collections[name]["records"].extend(records)

        failures = self.item_failures.get(name, [])
        items = [
            BulkItemResult(position=i, record_id=record.id, status=201)
            for i, record in enumerate(records)
        ]
        items += [
            BulkItemResult(position=len(records) + i, status=400, error=message)
            for i, message in enumerate(failures)
        ]
        return BulkResult(
            items=tuple(items),
            num_failed=len(failures) + self.reported_failures.get(name, 0)
        )

    def refresh(self, name: str, context: ExecutionContext) -> None:
        self._enter("refresh", name, context)

    def ping(self, context: ExecutionContext) -> bool:
        self.calls.append(("ping", ""))
        return True
