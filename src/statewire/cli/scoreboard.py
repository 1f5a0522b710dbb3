"""Scoreboard model used by the trace command."""

from statewire import ModelSchema, define_field, define_model, define_object
from statewire.schema import ModelInstance


def build_scoreboard() -> ModelSchema:
    """Two players with a score each, plus a round name."""
    return define_model(
        {
            "player1": define_object({"score": define_field(0)}),
            "player2": define_object({"score": define_field(0)}),
        },
        {"name": define_field("Round 1")},
    )


def play_rounds(model: ModelInstance, rounds: int) -> None:
    """Apply the round rule and commit after every round."""
    for i in range(1, rounds + 1):
        model.player1.score += 33 % i
        model.player2.score += model.player1.score % 5
        model.commit()
