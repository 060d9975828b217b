"""
Elasticsearch gateway over its REST API.

Implements the DocumentStore calls with a synchronous httpx client, plus a
few read helpers (count, get, mapping, search) that tests use to inspect the
loaded state.
"""
import json
from typing import Any, Sequence
from urllib.parse import quote

import httpx
from pydantic import TypeAdapter

from ..config import Settings
from ..core.context import ExecutionContext
from ..core.exceptions import StoreCancelledError, StoreError
from ..models.fixture import Record
from ..models.store import BulkItemResult, BulkResult
from .base import DocumentStore

NDJSON = "application/x-ndjson"

_SOURCE_ADAPTER = TypeAdapter(dict[str, Any])


class HTTPDocumentStore(DocumentStore):
    """DocumentStore backed by an Elasticsearch cluster."""

    def __init__(
        self,
        base_url: str = "http://localhost:9200",
        *,
        client: httpx.Client | None = None,
        timeout: float | None = 30.0,
        bulk_batch_size: int = 500
    ):
        """
        Initialize the gateway.

        Args:
            base_url: Cluster URL, ignored when `client` is given
            client: Pre-configured httpx client (must carry a base_url); not closed by close()
            timeout: Per-request timeout in seconds, None for no limit
            bulk_batch_size: Max records per _bulk request
        """
        super().__init__()
        if bulk_batch_size < 1:
            raise ValueError("bulk_batch_size must be at least 1")

        self._owns_client = client is None
        self.client = client or httpx.Client(base_url=base_url)
        self.timeout = timeout
        self.bulk_batch_size = bulk_batch_size

    @classmethod
    def from_settings(cls, settings: Settings) -> "HTTPDocumentStore":
        return cls(
            settings.elasticsearch_url,
            timeout=settings.request_timeout,
            bulk_batch_size=settings.bulk_batch_size,
        )

    @property
    def base_url(self) -> str:
        return str(self.client.base_url).rstrip("/")

    def close(self) -> None:
        if self._owns_client:
            self.client.close()

    def __enter__(self) -> "HTTPDocumentStore":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # DocumentStore

    def delete_collection(self, name: str, context: ExecutionContext) -> None:
        response = self._request(
            "DELETE",
            _index_path(name),
            context,
            params={"ignore_unavailable": "true"}
        )
        # Clusters without ignore_unavailable support answer 404 for a missing index
        if response.status_code == 404:
            self.logger.debug("collection_absent", collection=name)
            return
        _check_response(response)
        self.logger.debug("collection_deleted", collection=name)

    def create_collection(
        self,
        name: str,
        mapping: dict[str, Any] | None,
        settings: dict[str, Any] | None,
        context: ExecutionContext
    ) -> None:
        body: dict[str, Any] = {}
        if mapping is not None:
            body["mappings"] = mapping
        if settings is not None:
            body["settings"] = settings

        if body:
            response = self._request("PUT", _index_path(name), context, json=body)
        else:
            response = self._request("PUT", _index_path(name), context)
        _check_response(response)
        self.logger.debug("collection_created", collection=name, body_keys=sorted(body))

    def bulk_write(
        self,
        name: str,
        records: Sequence[Record],
        context: ExecutionContext
    ) -> BulkResult:
        items: list[BulkItemResult] = []
        unaccounted = 0

        for start in range(0, len(records), self.bulk_batch_size):
            context.raise_if_done()
            chunk = records[start:start + self.bulk_batch_size]
            chunk_items, missing = self._bulk_chunk(name, chunk, start, context)
            items.extend(chunk_items)
            unaccounted += missing

        num_failed = sum(1 for item in items if item.failed) + unaccounted
        self.logger.debug(
            "bulk_write_finished",
            collection=name,
            records=len(records),
            failed=num_failed
        )
        return BulkResult(items=tuple(items), num_failed=num_failed)

    def refresh(self, name: str, context: ExecutionContext) -> None:
        response = self._request("POST", f"{_index_path(name)}/_refresh", context)
        _check_response(response)

    def ping(self, context: ExecutionContext) -> bool:
        try:
            response = self._request("GET", "/", context)
        except StoreCancelledError:
            raise
        except StoreError as e:
            self.logger.debug("ping_failed", url=self.base_url, error=str(e))
            return False
        return response.is_success

    # Read helpers

    def collection_exists(self, name: str, context: ExecutionContext | None = None) -> bool:
        response = self._request("HEAD", _index_path(name), context or ExecutionContext.background())
        if response.status_code == 404:
            return False
        _check_response(response)
        return True

    def count(self, name: str, context: ExecutionContext | None = None) -> int:
        response = self._request("GET", f"{_index_path(name)}/_count", context or ExecutionContext.background())
        _check_response(response)
        return int(response.json()["count"])

    def get_record(
        self,
        name: str,
        record_id: str,
        context: ExecutionContext | None = None
    ) -> dict[str, Any] | None:
        """Return the stored body of a record, or None if it does not exist."""
        path = f"{_index_path(name)}/_doc/{quote(record_id, safe='')}"
        response = self._request("GET", path, context or ExecutionContext.background())
        if response.status_code == 404:
            return None
        _check_response(response)
        return response.json().get("_source")

    def get_mapping(self, name: str, context: ExecutionContext | None = None) -> dict[str, Any]:
        response = self._request("GET", f"{_index_path(name)}/_mapping", context or ExecutionContext.background())
        _check_response(response)
        return response.json().get(name, {}).get("mappings", {})

    def search(
        self,
        name: str,
        query: dict[str, Any] | None = None,
        context: ExecutionContext | None = None
    ) -> list[dict[str, Any]]:
        """Run a search and return the `_source` of every hit."""
        body = {"query": query or {"match_all": {}}}
        response = self._request(
            "POST",
            f"{_index_path(name)}/_search",
            context or ExecutionContext.background(),
            json=body
        )
        _check_response(response)
        hits = response.json().get("hits", {}).get("hits", [])
        return [hit.get("_source", {}) for hit in hits]

    # Internals

    def _request(
        self,
        method: str,
        path: str,
        context: ExecutionContext,
        **kwargs: Any
    ) -> httpx.Response:
        context.raise_if_done()

        try:
            response = self.client.request(
                method,
                path,
                timeout=context.timeout(self.timeout),
                **kwargs
            )
        except httpx.TimeoutException as e:
            aborted = context.error()
            if aborted is not None:
                raise aborted from e
            self.logger.error("request_timeout", method=method, path=path)
            raise StoreError(f"{method} {path} timed out: {e}") from e
        except httpx.HTTPError as e:
            self.logger.error("request_failed", method=method, path=path, error=str(e))
            raise StoreError(f"{method} {path} failed: {e}") from e

        # A cancel that fired while the request was in flight still aborts the call
        context.raise_if_done()
        return response

    def _bulk_chunk(
        self,
        name: str,
        chunk: Sequence[Record],
        start: int,
        context: ExecutionContext
    ) -> tuple[list[BulkItemResult], int]:
        """Send one _bulk request; returns item outcomes and the count of items the response omitted."""
        try:
            response = self._request(
                "POST",
                f"{_index_path(name)}/_bulk",
                context,
                content=encode_bulk_body(chunk),
                headers={"Content-Type": NDJSON}
            )
            _check_response(response)
            raw_items = response.json().get("items", [])
        except StoreCancelledError:
            raise
        except (StoreError, ValueError) as e:
            # Whole request failed: every record in it failed
            return [
                BulkItemResult(position=start + offset, record_id=record.id, error=str(e))
                for offset, record in enumerate(chunk)
            ], 0

        results = [
            _parse_bulk_item(start + offset, record, raw)
            for offset, (record, raw) in enumerate(zip(chunk, raw_items))
        ]
        return results, max(0, len(chunk) - len(raw_items))


def encode_bulk_body(records: Sequence[Record]) -> bytes:
    """Render records as _bulk NDJSON: one `index` action line plus one source line each."""
    lines = []
    for record in records:
        action: dict[str, Any] = {"_id": record.id} if record.id else {}
        lines.append(json.dumps({"index": action}))
        source = _SOURCE_ADAPTER.dump_python(record.body, mode="json")
        lines.append(json.dumps(source, ensure_ascii=False))
    return ("\n".join(lines) + "\n").encode("utf-8")


def _parse_bulk_item(position: int, record: Record, raw: dict[str, Any]) -> BulkItemResult:
    outcome = next(iter(raw.values()), {}) if raw else {}
    status = outcome.get("status")
    error = outcome.get("error")
    record_id = str(outcome.get("_id") or record.id)

    message = None
    if error is not None:
        if isinstance(error, dict):
            message = f"[{status}] {error.get('type', 'error')}: {error.get('reason', '')}"
        else:
            message = f"[{status}] {error}"
    elif status is None or status >= 300:
        message = f"[{status}] unexpected bulk item status"

    return BulkItemResult(position=position, record_id=record_id, status=status, error=message)


def _check_response(response: httpx.Response) -> None:
    if response.is_success:
        return
    raise StoreError(
        f"elasticsearch error [{response.status_code} {response.reason_phrase}]: {response.text}",
        status_code=response.status_code,
        body=response.text
    )


def _index_path(name: str) -> str:
    return "/" + quote(name, safe="")
