"""
Elasticsearch test fixtures.

Loads indices described by a directory tree of JSON mappings/settings and
YAML documents into a live cluster so integration tests start from a known
dataset.

Usage:
    from esfixtures import HTTPDocumentStore, Loader

    store = HTTPDocumentStore("http://localhost:9200")
    loader = Loader(store, directory="tests/fixtures/testdata")
    loader.load()
    ...
    loader.clean()
"""
from esfixtures.config import Settings
from esfixtures.core.context import ExecutionContext
from esfixtures.core.exceptions import (
    CleanError,
    ConfigError,
    EmptyFixtureSetError,
    FixtureDirectoryError,
    FixtureError,
    LoadError,
    MalformedRecordsError,
    MalformedSchemaError,
    MalformedSettingsError,
    ParseError,
    Phase,
    StoreCancelledError,
    StoreError,
    StoreUnavailableError,
)
from esfixtures.core.loader import Loader
from esfixtures.core.parser import parse_fixtures
from esfixtures.data_sources import DocumentStore, HTTPDocumentStore, wait_for_store
from esfixtures.models import BulkItemResult, BulkResult, CollectionFixture, FixtureSet, Record
from esfixtures.utils.logging import setup_logging

__all__ = [
    "Loader",
    "Settings",
    "setup_logging",
    "ExecutionContext",
    "parse_fixtures",
    "DocumentStore",
    "HTTPDocumentStore",
    "wait_for_store",
    "FixtureSet",
    "CollectionFixture",
    "Record",
    "BulkResult",
    "BulkItemResult",
    "FixtureError",
    "ConfigError",
    "ParseError",
    "FixtureDirectoryError",
    "EmptyFixtureSetError",
    "MalformedSchemaError",
    "MalformedSettingsError",
    "MalformedRecordsError",
    "LoadError",
    "Phase",
    "CleanError",
    "StoreError",
    "StoreCancelledError",
    "StoreUnavailableError",
]
