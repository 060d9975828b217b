"""
Unit tests for wait_for_store readiness polling.
"""
from unittest.mock import MagicMock

import pytest

from esfixtures.core.context import ExecutionContext
from esfixtures.core.exceptions import StoreCancelledError, StoreUnavailableError
from esfixtures.data_sources.base import DocumentStore
from esfixtures.data_sources.readiness import wait_for_store


def make_store(*answers):
    store = MagicMock(spec=DocumentStore)
    store.base_url = "http://es.test"
    store.ping.side_effect = list(answers)
    return store


class TestWaitForStore:

    def test_ready_immediately(self):
        store = make_store(True)

        wait_for_store(store, attempts=3, max_wait=0)

        assert store.ping.call_count == 1

    def test_ready_after_retries(self):
        store = make_store(False, False, True)

        wait_for_store(store, attempts=5, max_wait=0)

        assert store.ping.call_count == 3

    def test_gives_up(self):
        store = make_store(False, False, False)

        with pytest.raises(StoreUnavailableError) as exc_info:
            wait_for_store(store, attempts=3, max_wait=0)

        assert exc_info.value.attempts == 3
        assert exc_info.value.url == "http://es.test"
        assert store.ping.call_count == 3

    def test_cancellation_not_retried(self):
        store = make_store(StoreCancelledError("cancelled"), True)

        with pytest.raises(StoreCancelledError):
            wait_for_store(store, attempts=5, max_wait=0)

        assert store.ping.call_count == 1

    def test_context_passed_to_ping(self):
        store = make_store(True)
        context = ExecutionContext.background().with_timeout(10)

        wait_for_store(store, attempts=1, context=context)

        store.ping.assert_called_once_with(context)
