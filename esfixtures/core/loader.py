"""
Loader: reconciles a parsed fixture set against a live document store.

load() fails fast on the first phase error; clean() always attempts every
collection and reports all failures together.
"""
from pathlib import Path

from ..data_sources.base import DocumentStore
from ..models.fixture import CollectionFixture, FixtureSet
from ..utils.logging import get_logger
from .context import ExecutionContext
from .exceptions import CleanError, ConfigError, LoadError, Phase
from .parser import parse_fixtures

logger = get_logger(__name__)


class Loader:
    """
    Manages document store test fixtures.

    Fixture files are parsed during construction, so format errors surface
    before any store call is made. The parsed set is never mutated, so
    load() and clean() can be called any number of times.

    Not safe for concurrent load()/clean() calls from several threads.
    """

    def __init__(
        self,
        store: DocumentStore | None,
        *,
        directory: str | Path | None = None,
        context: ExecutionContext | None = None
    ):
        """
        Initialize loader.

        Args:
            store: Document store gateway (required)
            directory: Fixture root directory (required)
            context: Execution context for store calls; defaults to a background context

        Raises:
            ConfigError: If store or directory is missing
            ParseError: If the fixture files are malformed
        """
        if store is None:
            raise ConfigError("store must not be None")
        if not isinstance(store, DocumentStore):
            raise ConfigError(
                f"store must be a DocumentStore, got {type(store).__name__}"
            )
        if directory is None or str(directory) == "":
            raise ConfigError("directory is required")

        self.store = store
        self.directory = Path(directory)
        self.context = context or ExecutionContext.background()
        self.logger = logger.bind(component="loader", directory=str(self.directory))

        self._fixtures = parse_fixtures(self.directory)

    @property
    def fixtures(self) -> FixtureSet:
        return self._fixtures

    def load(self) -> None:
        """
        Delete, recreate, populate and refresh every collection in order.

        Raises:
            LoadError: On the first phase that fails; later collections are not touched
        """
        self.logger.info("load_started", collections=self._fixtures.names)

        for collection in self._fixtures:
            self._reconcile(collection)

        self.logger.info("load_finished", collections=len(self._fixtures))

    def clean(self) -> None:
        """
        Delete every collection managed by this loader.

        Raises:
            CleanError: Listing every collection whose deletion failed
        """
        failures: list[tuple[str, Exception]] = []

        for collection in self._fixtures:
            try:
                self.store.delete_collection(collection.name, self.context)
            except Exception as e:
                self.logger.warning("clean_failed", collection=collection.name, error=str(e))
                failures.append((collection.name, e))

        if failures:
            raise CleanError(failures)

        self.logger.info("clean_finished", collections=len(self._fixtures))

    def _reconcile(self, collection: CollectionFixture) -> None:
        name = collection.name
        log = self.logger.bind(collection=name)

        phase = Phase.DELETE
        try:
            self.store.delete_collection(name, self.context)

            phase = Phase.CREATE
            self.store.create_collection(name, collection.mapping, collection.settings, self.context)

            phase = Phase.POPULATE
            self._populate(collection)

            phase = Phase.ACTIVATE
            self.store.refresh(name, self.context)
        except LoadError:
            raise
        except Exception as e:
            log.error("load_phase_failed", phase=phase.value, error=str(e))
            raise LoadError(name, phase, cause=e) from e

        log.debug("collection_loaded", records=len(collection.records))

    def _populate(self, collection: CollectionFixture) -> None:
        if not collection.records:
            return

        result = self.store.bulk_write(collection.name, collection.records, self.context)

        if result.failures:
            self.logger.error(
                "load_phase_failed",
                collection=collection.name,
                phase=Phase.POPULATE.value,
                failed=len(result.failures)
            )
            raise LoadError(collection.name, Phase.POPULATE, failures=result.failures)

        if result.num_failed > 0:
            self.logger.error(
                "load_phase_failed",
                collection=collection.name,
                phase=Phase.POPULATE.value,
                failed=result.num_failed
            )
            raise LoadError(
                collection.name,
                Phase.POPULATE,
                failures=[f"{result.num_failed} records failed"]
            )
