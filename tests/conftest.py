"""Pytest fixtures for tests."""

from typing import Any

import pytest

from statewire import ModelEvents, define_field, define_model, define_object, get_field_path


class EventRecorder:
    """Collects every event a model emits as comparable tuples."""

    def __init__(self):
        self.events: list[tuple] = []
        self.descriptors: list[Any] = []

    def attach(self, model) -> "EventRecorder":
        model.on(ModelEvents.VALUE, self.on_value)
        model.on(ModelEvents.COMMIT, self.on_commit)
        model.on(ModelEvents.SNAPSHOT_VALUE, self.on_snapshot_value)
        model.on(ModelEvents.SNAPSHOT_COMMIT, self.on_snapshot_commit)
        return self

    def on_value(self, field, value):
        self.descriptors.append(field)
        self.events.append((ModelEvents.VALUE, get_field_path(field), value))

    def on_commit(self, revision):
        self.events.append((ModelEvents.COMMIT, revision))

    def on_snapshot_value(self, field, value):
        self.descriptors.append(field)
        self.events.append((ModelEvents.SNAPSHOT_VALUE, get_field_path(field), value))

    def on_snapshot_commit(self, revision):
        self.events.append((ModelEvents.SNAPSHOT_COMMIT, revision))

    def of(self, event: ModelEvents) -> list[tuple]:
        return [e for e in self.events if e[0] == event]

    def clear(self):
        self.events.clear()
        self.descriptors.clear()


@pytest.fixture
def scoreboard_schema():
    """Two players with a score each, plus a round name."""
    return define_model(
        {
            "player1": define_object({"score": define_field(0)}),
            "player2": define_object({"score": define_field(0)}),
        },
        {"name": define_field("Round 1")},
    )


@pytest.fixture
def model(scoreboard_schema):
    """A single scoreboard instance."""
    return scoreboard_schema.create()


@pytest.fixture
def recorder(model):
    """Recorder attached to the scoreboard instance."""
    return EventRecorder().attach(model)


@pytest.fixture
def attach_recorder():
    """Factory attaching a fresh recorder to any model."""
    def attach(model) -> EventRecorder:
        return EventRecorder().attach(model)
    return attach
