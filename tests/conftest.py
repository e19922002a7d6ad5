"""Shared fixtures: hand-built game states and a no-op shuffle."""

import random
from typing import Optional, Sequence

import pytest

from unoengine.engine import Card, Color, GamePhase, GameState, Player


class NoShuffleRandom(random.Random):
    """Random source that leaves shuffled piles in order and always picks the first choice."""

    def randrange(self, start, stop=None, step=1):
        return (start if stop is None else stop) - 1

    def choice(self, seq):
        return seq[0]


def _card(card_id: str, color: str, value: str) -> Card:
    return Card(id=card_id, color=Color(color), value=value)


def _make_state(
    hands: Sequence[Sequence[Card]],
    discard: Sequence[Card],
    current_color: Optional[Color] = None,
    draw_pile: Sequence[Card] = (),
    current: int = 0,
    direction: int = 1,
    human_seat: int = 0,
    **overrides,
) -> GameState:
    players = tuple(
        Player(id=f"player-{i}", name=f"P{i}", is_human=i == human_seat).with_hand(tuple(hand))
        for i, hand in enumerate(hands)
    )
    if current_color is None:
        current_color = discard[-1].color
    return GameState(
        players=players,
        current_player_index=current,
        direction=direction,
        draw_pile=tuple(draw_pile),
        discard_pile=tuple(discard),
        current_color=current_color,
        phase=overrides.pop("phase", GamePhase.PLAYING),
        **overrides,
    )


@pytest.fixture
def card():
    """Factory: card("c1", "red", "5")."""
    return _card


@pytest.fixture
def make_state():
    """Factory for a state with the given hands (seat 0 human by default)."""
    return _make_state


@pytest.fixture
def no_shuffle() -> NoShuffleRandom:
    return NoShuffleRandom()
