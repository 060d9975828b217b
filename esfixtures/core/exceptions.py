"""
Custom exceptions for fixture parsing and loading.
Specific exceptions for each failure mode, all naming the collection or file at fault.
"""
from enum import Enum
from pathlib import Path
from typing import Sequence


class FixtureError(Exception):
    """Base exception for all library errors."""
    pass


class ConfigError(FixtureError):
    """Loader configuration is invalid or missing."""
    pass


class ParseError(FixtureError):
    """Fixture files could not be read or are malformed."""

    def __init__(self, message: str, path: str | Path | None = None, collection: str | None = None):
        self.path = Path(path) if path is not None else None
        self.collection = collection
        self.detail = message
        super().__init__(self._render())

    def _render(self) -> str:
        message = self.detail
        if self.path is not None:
            message = f"{message} ({self.path})"
        if self.collection is not None:
            message = f"collection '{self.collection}': {message}"
        return message

    def for_collection(self, collection: str) -> "ParseError":
        """Attach the collection name and refresh the message."""
        self.collection = collection
        self.args = (self._render(),)
        return self


class FixtureDirectoryError(ParseError):
    """Fixture root is missing or unreadable."""
    pass


class EmptyFixtureSetError(ParseError):
    """Fixture root contains no collection directories."""
    pass


class MalformedSchemaError(ParseError):
    """_mapping.json is not a well-formed JSON object."""
    pass


class MalformedSettingsError(ParseError):
    """_settings.json is not a well-formed JSON object."""
    pass


class MalformedRecordsError(ParseError):
    """A record source is not a YAML sequence of mappings."""
    pass


class Phase(str, Enum):
    """Reconciliation phases run by Loader.load()."""

    DELETE = "delete"
    CREATE = "create"
    POPULATE = "populate"
    ACTIVATE = "activate"


class LoadError(FixtureError):
    """A reconciliation phase failed for one collection."""

    def __init__(
        self,
        collection: str,
        phase: Phase,
        cause: Exception | None = None,
        failures: Sequence[str] = ()
    ):
        self.collection = collection
        self.phase = phase
        self.cause = cause
        self.failures = tuple(failures)

        if self.failures:
            detail = "; ".join(self.failures)
        else:
            detail = str(cause) if cause is not None else "unknown error"
        super().__init__(f"collection '{collection}': {phase.value} failed: {detail}")


class CleanError(FixtureError):
    """One or more collections could not be deleted during teardown."""

    def __init__(self, failures: Sequence[tuple[str, Exception]]):
        self.failures = list(failures)
        details = "; ".join(f"collection '{name}': {error}" for name, error in self.failures)
        super().__init__(f"cleaning up {len(self.failures)} collection(s) failed: {details}")

    @property
    def collections(self) -> list[str]:
        return [name for name, _ in self.failures]


class StoreError(FixtureError):
    """Error returned by the document store."""

    def __init__(self, message: str, status_code: int | None = None, body: str | None = None):
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class StoreCancelledError(StoreError):
    """Execution context was cancelled or its deadline passed."""

    def __init__(self, reason: str = "cancelled"):
        self.reason = reason
        super().__init__(f"operation aborted: {reason.replace('_', ' ')}")


class StoreUnavailableError(StoreError):
    """Document store never answered readiness checks."""

    def __init__(self, url: str, attempts: int):
        self.url = url
        self.attempts = attempts
        super().__init__(f"document store at '{url}' unavailable after {attempts} attempts")
