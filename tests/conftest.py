"""
Shared pytest fixtures for all tests.
Provides fixture trees, a fake cluster and store doubles.
"""
import pytest

from esfixtures.config import Settings
from esfixtures.data_sources.http_store import HTTPDocumentStore
from esfixtures.utils.logging import setup_logging
from tests.fixtures import TESTDATA_DIR, FakeElasticsearch, FixtureTree, RecordingDocumentStore


@pytest.fixture
def testdata_dir():
    """Provide the sample fixture root (users + products)."""
    return TESTDATA_DIR


@pytest.fixture
def fixture_tree(tmp_path):
    """Provide a FixtureTree rooted in a temporary directory."""
    return FixtureTree(tmp_path / "fixtures")


@pytest.fixture
def fake_es():
    """Provide an empty in-memory Elasticsearch."""
    return FakeElasticsearch()


@pytest.fixture
def http_store(fake_es):
    """Provide an HTTPDocumentStore talking to the fake cluster."""
    client = fake_es.client()
    store = HTTPDocumentStore(client=client, timeout=5.0, bulk_batch_size=500)
    yield store
    client.close()


@pytest.fixture
def recording_store():
    """Provide a DocumentStore double that records calls."""
    return RecordingDocumentStore()


# Pytest markers for test categorization
def pytest_configure(config):
    """Register custom pytest markers and route library logs to stderr."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (need a live Elasticsearch)"
    )
    setup_logging(Settings(_env_file=None, log_level="DEBUG"))
