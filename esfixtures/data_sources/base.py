"""
Base abstraction for document stores.
Defines the calls the Loader needs to reconcile a fixture set.
"""
from abc import ABC, abstractmethod
from typing import Any, Sequence

from ..core.context import ExecutionContext
from ..models.fixture import Record
from ..models.store import BulkResult
from ..utils.logging import get_logger


class DocumentStore(ABC):
    """Abstract base class for document store gateways."""

    def __init__(self):
        self.logger = get_logger(self.__class__.__name__)

    @abstractmethod
    def delete_collection(self, name: str, context: ExecutionContext) -> None:
        """
        Delete a collection.

        Deleting a collection that does not exist succeeds.

        Raises:
            StoreError: If the store rejects the request
        """
        pass

    @abstractmethod
    def create_collection(
        self,
        name: str,
        mapping: dict[str, Any] | None,
        settings: dict[str, Any] | None,
        context: ExecutionContext
    ) -> None:
        """
        Create a collection.

        With neither mapping nor settings the request has no body and the
        store applies its defaults.

        Raises:
            StoreError: If the collection exists or mapping/settings are rejected
        """
        pass

    @abstractmethod
    def bulk_write(
        self,
        name: str,
        records: Sequence[Record],
        context: ExecutionContext
    ) -> BulkResult:
        """
        Write all records to a collection.

        Item failures are reported in the result, not raised.

        Raises:
            StoreCancelledError: If the context is done
        """
        pass

    @abstractmethod
    def refresh(self, name: str, context: ExecutionContext) -> None:
        """
        Make previously written records visible to reads.

        Raises:
            StoreError: If the refresh fails
        """
        pass

    @abstractmethod
    def ping(self, context: ExecutionContext) -> bool:
        """Return True if the store answers."""
        pass
