"""Unit tests for EventEmitter."""

import logging
from unittest.mock import Mock, call

import pytest

from statewire.events import EventEmitter


@pytest.fixture
def emitter():
    return EventEmitter(emitter_name="test")


class TestEventEmitterDelivery:
    """Test listener registration and delivery order."""

    @pytest.mark.unit
    def test_emit_calls_listeners_in_registration_order(self, emitter):
        calls = []
        emitter.on("value", lambda v: calls.append(("a", v)))
        emitter.on("value", lambda v: calls.append(("b", v)))

        assert emitter.emit("value", 1) is True
        assert calls == [("a", 1), ("b", 1)]

    @pytest.mark.unit
    def test_emit_without_listeners_returns_false(self, emitter):
        assert emitter.emit("nothing") is False

    @pytest.mark.unit
    def test_listeners_are_scoped_to_event_name(self, emitter):
        value_listener = Mock()
        commit_listener = Mock()
        emitter.on("value", value_listener)
        emitter.on("commit", commit_listener)

        emitter.emit("commit", 3)

        value_listener.assert_not_called()
        commit_listener.assert_called_once_with(3)

    @pytest.mark.unit
    def test_keyword_arguments_are_forwarded(self, emitter):
        listener = Mock()
        emitter.on("value", listener)

        emitter.emit("value", "field", 2, instance_id=7)

        listener.assert_called_once_with("field", 2, instance_id=7)

    @pytest.mark.unit
    def test_same_listener_registered_twice_runs_twice(self, emitter):
        listener = Mock()
        emitter.on("value", listener)
        emitter.on("value", listener)

        emitter.emit("value", 1)

        assert listener.call_count == 2

    @pytest.mark.unit
    def test_non_callable_listener_is_rejected(self, emitter):
        with pytest.raises(TypeError, match="must be callable"):
            emitter.on("value", 42)


class TestEventEmitterOnceAndOff:
    """Test one-shot listeners and removal."""

    @pytest.mark.unit
    def test_once_listener_runs_only_once(self, emitter):
        listener = Mock()
        emitter.once("value", listener)

        emitter.emit("value", 1)
        emitter.emit("value", 2)

        listener.assert_called_once_with(1)
        assert emitter.listener_count("value") == 0

    @pytest.mark.unit
    def test_once_listener_removed_before_reentrant_emit(self, emitter):
        listener = Mock(side_effect=lambda v: emitter.emit("value", v + 1) if v == 1 else None)
        emitter.once("value", listener)

        emitter.emit("value", 1)

        listener.assert_called_once_with(1)

    @pytest.mark.unit
    def test_off_removes_only_that_listener(self, emitter):
        kept = Mock()
        removed = Mock()
        emitter.on("value", kept)
        emitter.on("value", removed)

        emitter.off("value", removed)
        emitter.emit("value", 1)

        kept.assert_called_once_with(1)
        removed.assert_not_called()

    @pytest.mark.unit
    def test_off_removes_most_recent_registration(self, emitter):
        listener = Mock()
        emitter.on("value", listener)
        emitter.on("value", listener)

        emitter.off("value", listener)
        emitter.emit("value", 1)

        listener.assert_called_once_with(1)

    @pytest.mark.unit
    def test_off_matches_once_registration(self, emitter):
        listener = Mock()
        emitter.once("value", listener)

        emitter.off("value", listener)
        emitter.emit("value", 1)

        listener.assert_not_called()

    @pytest.mark.unit
    def test_off_unknown_listener_is_noop(self, emitter):
        emitter.off("value", Mock())
        assert emitter.listener_count("value") == 0

    @pytest.mark.unit
    def test_listener_added_during_emit_runs_next_time(self, emitter):
        late = Mock()
        emitter.once("value", lambda v: emitter.on("value", late))

        emitter.emit("value", 1)
        late.assert_not_called()

        emitter.emit("value", 2)
        late.assert_called_once_with(2)

    @pytest.mark.unit
    def test_listener_removed_during_emit_still_runs_in_current_pass(self, emitter):
        second = Mock()
        emitter.on("value", lambda v: emitter.off("value", second))
        emitter.on("value", second)

        emitter.emit("value", 1)
        emitter.emit("value", 2)

        assert second.call_args_list == [call(1)]

    @pytest.mark.unit
    def test_listeners_and_remove_all(self, emitter):
        first, second = Mock(), Mock()
        emitter.on("value", first)
        emitter.on("commit", second)

        assert emitter.listeners("value") == [first]

        emitter.remove_all_listeners("value")
        assert emitter.listener_count("value") == 0
        assert emitter.listener_count("commit") == 1

        emitter.remove_all_listeners()
        assert emitter.listener_count("commit") == 0


class TestEventEmitterErrors:
    """Test listener exception handling."""

    @pytest.mark.unit
    def test_listener_exception_propagates_by_default(self, emitter):
        after = Mock()
        emitter.on("value", Mock(side_effect=RuntimeError("boom")))
        emitter.on("value", after)

        with pytest.raises(RuntimeError, match="boom"):
            emitter.emit("value", 1)
        after.assert_not_called()

    @pytest.mark.unit
    def test_isolated_errors_are_logged_and_delivery_continues(self, caplog):
        emitter = EventEmitter(isolate_errors=True, emitter_name="test")
        after = Mock()
        emitter.on("value", Mock(side_effect=RuntimeError("boom")))
        emitter.on("value", after)

        with caplog.at_level(logging.ERROR, logger="statewire.events.emitter"):
            emitter.emit("value", 1)

        after.assert_called_once_with(1)
        assert "boom" in caplog.text
