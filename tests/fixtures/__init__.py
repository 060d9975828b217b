"""
Test fixtures for parser and loader tests.

This package provides:
- A sample fixture tree (testdata/users, testdata/products)
- FixtureTree, a builder for throwaway fixture trees
- FakeElasticsearch, an in-memory cluster for httpx.MockTransport
- RecordingDocumentStore, a DocumentStore double that logs calls

Usage:
    from tests.fixtures import FixtureTree, TESTDATA_DIR

    tree = FixtureTree(tmp_path)
    tree.records("users", "users.yml", [{"_id": 1, "name": "Alice"}])
"""
from tests.fixtures.fake_elasticsearch import FakeElasticsearch
from tests.fixtures.recording_store import RecordingDocumentStore
from tests.fixtures.tree import TESTDATA_DIR, FixtureTree

__all__ = ["FakeElasticsearch", "FixtureTree", "RecordingDocumentStore", "TESTDATA_DIR"]
