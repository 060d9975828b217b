"""
Unit tests for error messages.
Every error must name the collection (and file or phase) at fault.
"""
from pathlib import Path

from esfixtures.core.exceptions import (
    CleanError,
    FixtureError,
    LoadError,
    MalformedRecordsError,
    ParseError,
    Phase,
    StoreError,
    StoreUnavailableError,
)


class TestParseError:

    def test_message_with_path(self):
        error = MalformedRecordsError("malformed record source: invalid YAML", Path("fx/users/a.yml"))

        assert str(error) == "malformed record source: invalid YAML (fx/users/a.yml)"
        assert error.collection is None
        assert isinstance(error, ParseError)
        assert isinstance(error, FixtureError)

    def test_for_collection_prefixes_message(self):
        error = ParseError("bad", "fx/users/_mapping.json").for_collection("users")

        assert error.collection == "users"
        assert str(error) == "collection 'users': bad (fx/users/_mapping.json)"


class TestLoadError:

    def test_cause_message(self):
        error = LoadError("users", Phase.CREATE, cause=StoreError("elasticsearch error [400 Bad Request]: {}"))

        assert str(error) == "collection 'users': create failed: elasticsearch error [400 Bad Request]: {}"

    def test_failures_joined(self):
        error = LoadError("users", Phase.POPULATE, failures=["[400] a: x", "[409] b: y"])

        assert str(error) == "collection 'users': populate failed: [400] a: x; [409] b: y"
        assert error.failures == ("[400] a: x", "[409] b: y")

    def test_phase_is_string_enum(self):
        assert Phase.ACTIVATE == "activate"


class TestCleanError:

    def test_lists_every_collection(self):
        error = CleanError([("users", StoreError("forbidden")), ("products", StoreError("timeout"))])

        assert error.collections == ["users", "products"]
        assert str(error) == (
            "cleaning up 2 collection(s) failed: "
            "collection 'users': forbidden; collection 'products': timeout"
        )


class TestStoreUnavailableError:

    def test_message(self):
        error = StoreUnavailableError("http://localhost:9200", 3)

        assert "http://localhost:9200" in str(error)
        assert error.attempts == 3
        assert isinstance(error, StoreError)
