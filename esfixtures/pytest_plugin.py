"""
pytest fixtures for loading fixture trees into a live cluster.

Registered through the pytest11 entry point; without installing the package,
enable it in the rootdir conftest.py:

    pytest_plugins = ["esfixtures.pytest_plugin"]

    def test_search(fixture_loader_factory, document_store):
        fixture_loader_factory("tests/fixtures/testdata")
        assert document_store.count("users") == 2

The cluster URL comes from ESFIXTURES_ELASTICSEARCH_URL. Loading registers no
logging handlers; call esfixtures.utils.setup_logging() from pytest_configure
to see the library's events.
"""
from pathlib import Path
from typing import Callable, Iterator

import pytest

from esfixtures.config import Settings
from esfixtures.core.context import ExecutionContext
from esfixtures.core.exceptions import CleanError, StoreUnavailableError
from esfixtures.core.loader import Loader
from esfixtures.data_sources.base import DocumentStore
from esfixtures.data_sources.http_store import HTTPDocumentStore
from esfixtures.data_sources.readiness import wait_for_store
from esfixtures.utils.logging import get_logger

logger = get_logger(__name__)


class LoaderFactory:
    """Builds Loaders for one test and cleans them up afterwards."""

    def __init__(self, default_store: Callable[[], DocumentStore]):
        self._default_store = default_store
        self.loaders: list[Loader] = []

    def __call__(
        self,
        directory: str | Path,
        *,
        store: DocumentStore | None = None,
        context: ExecutionContext | None = None,
        load: bool = True
    ) -> Loader:
        loader = Loader(store or self._default_store(), directory=directory, context=context)
        # Register before loading so a partial load is still cleaned up
        self.loaders.append(loader)
        if load:
            loader.load()
        return loader

    def cleanup(self) -> None:
        """Clean every loader in reverse creation order; failures are logged."""
        while self.loaders:
            loader = self.loaders.pop()
            try:
                loader.clean()
            except CleanError as e:
                logger.warning("fixture_cleanup_failed", collections=e.collections, error=str(e))


@pytest.fixture(scope="session")
def esfixtures_settings() -> Settings:
    """Settings read from the environment / .env file."""
    return Settings()


@pytest.fixture(scope="session")
def _esfixtures_store(esfixtures_settings: Settings) -> Iterator[tuple[HTTPDocumentStore, str | None]]:
    store = HTTPDocumentStore.from_settings(esfixtures_settings)
    try:
        wait_for_store(store, attempts=esfixtures_settings.readiness_attempts)
        unavailable = None
    except StoreUnavailableError as e:
        unavailable = str(e)
    yield store, unavailable
    store.close()


@pytest.fixture
def document_store(_esfixtures_store: tuple[HTTPDocumentStore, str | None]) -> HTTPDocumentStore:
    """Elasticsearch gateway from settings; skips the test when the cluster is down."""
    store, unavailable = _esfixtures_store
    if unavailable is not None:
        pytest.skip(unavailable)
    return store


@pytest.fixture
def fixture_loader_factory(request: pytest.FixtureRequest) -> Iterator[LoaderFactory]:
    """
    Factory building Loaders whose collections are cleaned at teardown.

    The live `document_store` is only requested when a call omits `store`.
    """
    factory = LoaderFactory(lambda: request.getfixturevalue("document_store"))
    yield factory
    factory.cleanup()
