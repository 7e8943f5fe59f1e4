"""Tests for QueryKeyTracker."""

import logging

import pytest

from syncql import CacheKey, QueryKeyTracker


@pytest.fixture
def tracker() -> QueryKeyTracker:
    return QueryKeyTracker()


class TestQueryKeyTracker:
    """Tests for tracking query instances."""

    def test_empty(self, tracker: QueryKeyTracker) -> None:
        assert tracker.get_query_keys_to_update("ListItems") == []
        assert not tracker.has_query_to_update("ListItems")

    def test_add_query(self, tracker: QueryKeyTracker) -> None:
        key = CacheKey(query="{ items }", variables={"filter": "x"})
        tracker.add_query("ListItems", key)

        assert tracker.get_query_keys_to_update("ListItems") == [key]
        assert tracker.has_query_to_update("ListItems")

    def test_add_is_idempotent(self, tracker: QueryKeyTracker) -> None:
        """Structurally equal keys are tracked once."""
        tracker.add_query("ListItems", CacheKey(query="{ items }", variables={"a": 1}))
        tracker.add_query("ListItems", CacheKey(query="{ items }", variables={"a": 1}))

        assert len(tracker.get_query_keys_to_update("ListItems")) == 1
        assert len(tracker) == 1

    def test_variables_tracked_independently(self, tracker: QueryKeyTracker) -> None:
        """Each variable set is its own key, in insertion order."""
        x = CacheKey(query="{ items }", variables={"filter": "x"})
        y = CacheKey(query="{ items }", variables={"filter": "y"})
        tracker.add_query("ListItems", x)
        tracker.add_query("ListItems", y)

        assert tracker.get_query_keys_to_update("ListItems") == [x, y]

    def test_remove_query(self, tracker: QueryKeyTracker) -> None:
        """Removal matches structurally."""
        x = CacheKey(query="{ items }", variables={"filter": "x"})
        y = CacheKey(query="{ items }", variables={"filter": "y"})
        tracker.add_query("ListItems", x)
        tracker.add_query("ListItems", y)

        tracker.remove_query("ListItems", CacheKey(query="{ items }", variables={"filter": "x"}))

        assert tracker.get_query_keys_to_update("ListItems") == [y]

    def test_remove_missing_is_noop(self, tracker: QueryKeyTracker) -> None:
        key = CacheKey(query="{ items }")
        tracker.remove_query("ListItems", key)
        tracker.add_query("ListItems", key)
        tracker.remove_query("ListItems", CacheKey(query="{ other }"))

        assert tracker.get_query_keys_to_update("ListItems") == [key]

    def test_returned_list_is_a_copy(self, tracker: QueryKeyTracker) -> None:
        key = CacheKey(query="{ items }")
        tracker.add_query("ListItems", key)

        tracker.get_query_keys_to_update("ListItems").clear()

        assert tracker.has_query_to_update("ListItems")

    def test_debug_logging(self, caplog: pytest.LogCaptureFixture) -> None:
        """Tracking changes are logged only in debug mode."""
        key = CacheKey(query="{ items }", operation_name="ListItems")

        with caplog.at_level(logging.DEBUG, logger="syncql"):
            QueryKeyTracker().add_query("ListItems", key)
            assert caplog.records == []

            debug_tracker = QueryKeyTracker(debug=True)
            debug_tracker.add_query("ListItems", key)
            debug_tracker.remove_query("ListItems", key)

        messages = [record.getMessage() for record in caplog.records]
        assert any("Tracking a new query instance" in m for m in messages)
        assert any("Removed a tracked query instance" in m for m in messages)
