"""Special card effects: turn order, direction and forced draws."""

import random
from dataclasses import dataclass
from typing import Optional, Tuple

from unoengine.engine.card import Card
from unoengine.engine.deck import draw_from_pile
from unoengine.engine.game_state import GameState, Player

FORCED_DRAWS = {"draw-two": 2, "wild-draw-four": 4}


def next_seat(index: int, direction: int, num_players: int) -> int:
    """Step one seat in the given direction, wrapping around the table."""
    return (index + direction) % num_players


@dataclass(frozen=True)
class EffectOutcome:
    """Everything a card effect may change."""

    players: Tuple[Player, ...]
    draw_pile: Tuple[Card, ...]
    discard_pile: Tuple[Card, ...]
    direction: int
    next_player_index: int
    messages: Tuple[str, ...] = ()


def resolve_effect(
    state: GameState,
    card: Card,
    acting_index: int,
    is_initial: bool = False,
    rng: Optional[random.Random] = None,
) -> EffectOutcome:
    """Work out who plays next after card, and apply any forced draw.

    For a played card acting_index is the seat that played it. The starter
    card is played by no one: counting starts from state.current_player_index
    and a plain starter leaves that seat to act.
    """
    players = state.players
    draw_pile = state.draw_pile
    discard_pile = state.discard_pile
    direction = state.direction
    n = len(players)
    base = state.current_player_index if is_initial else acting_index
    actor = "The first card" if is_initial else players[acting_index].name

    if card.value == "reverse":
        direction = -direction
        next_index = next_seat(base, direction, n)
        if n == 2 and not is_initial:
            next_index = next_seat(next_index, direction, n)
        message = (
            "The first card reversed the direction"
            if is_initial
            else "Direction reversed"
        )
        return EffectOutcome(players, draw_pile, discard_pile, direction, next_index, (message,))

    if card.value == "skip":
        skipped = next_seat(base, direction, n)
        next_index = next_seat(skipped, direction, n)
        message = f"{actor} skips {players[skipped].name}"
        return EffectOutcome(players, draw_pile, discard_pile, direction, next_index, (message,))

    if card.value in FORCED_DRAWS:
        target = next_seat(base, direction, n)
        count = FORCED_DRAWS[card.value]
        drawn, draw_pile, discard_pile = draw_from_pile(draw_pile, discard_pile, count, rng)
        victim = players[target]
        players = (
            players[:target]
            + (victim.with_hand(victim.hand + drawn),)
            + players[target + 1:]
        )
        next_index = next_seat(target, direction, n)
        plural = "" if len(drawn) == 1 else "s"
        message = f"{actor} makes {victim.name} draw {len(drawn)} card{plural}"
        return EffectOutcome(players, draw_pile, discard_pile, direction, next_index, (message,))

    next_index = base if is_initial else next_seat(base, direction, n)
    return EffectOutcome(players, draw_pile, discard_pile, direction, next_index)
