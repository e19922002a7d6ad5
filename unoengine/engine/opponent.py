"""Greedy policy for the scripted opponents."""

import random
from collections import Counter
from typing import Iterable, Optional, Sequence

from unoengine.engine.card import STANDARD_COLORS, Card, Color
from unoengine.engine.deck import resolve_rng
from unoengine.engine.game_state import GamePhase, GameState
from unoengine.engine.rules import (
    Action,
    ActionResult,
    ChooseColor,
    DrawCard,
    PassTurn,
    PlayCard,
    apply_action,
    is_playable,
)

# Higher plays first; numbers share the lowest priority
CARD_PRIORITY = {
    "wild-draw-four": 5,
    "wild": 4,
    "draw-two": 3,
    "skip": 2,
    "reverse": 1,
}


def pick_card(cards: Sequence[Card]) -> Card:
    """Pick the highest-priority card, ties going to the smallest id."""
    return sorted(cards, key=lambda c: (-CARD_PRIORITY.get(c.value, 0), c.id))[0]


def choose_best_color(hand: Iterable[Card], rng: Optional[random.Random] = None) -> Color:
    """Return the color the hand holds most of, a random one on ties."""
    rng = resolve_rng(rng)
    counts = Counter(c.color for c in hand if c.color in STANDARD_COLORS)
    if not counts:
        return rng.choice(STANDARD_COLORS)
    best = max(counts.values())
    return rng.choice([color for color in STANDARD_COLORS if counts[color] == best])


def _play_action(state: GameState, card: Card, rng: random.Random) -> PlayCard:
    if not card.is_wild:
        return PlayCard(card.id)
    rest = [c for c in state.current_player.hand if c.id != card.id]
    return PlayCard(card.id, choose_best_color(rest, rng))


def choose_action(state: GameState, rng: Optional[random.Random] = None) -> Optional[Action]:
    """Next single step of the greedy policy for the active seat.

    Plays the best playable card; otherwise draws, and passes when the
    drawn card cannot be played. Returns None once the game is over.
    """
    rng = resolve_rng(rng)
    if state.phase == GamePhase.FINISHED:
        return None
    if state.phase == GamePhase.CHOOSE_COLOR:
        return ChooseColor(choose_best_color(state.current_player.hand, rng))

    playable = [c for c in state.current_player.hand if is_playable(state, c)]
    if playable:
        return _play_action(state, pick_card(playable), rng)
    if state.drawn_card_id is not None:
        return PassTurn()
    return DrawCard()


def run_opponent_turn(state: GameState, rng: Optional[random.Random] = None) -> ActionResult:
    """Play a whole turn for a non-human seat.

    Play the best card, or draw once and then play the drawn card if it is
    playable, passing otherwise.
    """
    if state.phase != GamePhase.PLAYING:
        return ActionResult.rejected(state, "opponent can only act while playing")
    if state.current_player.is_human:
        return ActionResult.rejected(state, "active seat is human")

    rng = resolve_rng(rng)
    action = choose_action(state, rng)
    result = apply_action(state, action, rng)
    if isinstance(action, DrawCard) and result.applied:
        result = apply_action(result.state, choose_action(result.state, rng), rng)
    return result


def take_opponent_turn(state: GameState, rng: Optional[random.Random] = None) -> GameState:
    return run_opponent_turn(state, rng).state
