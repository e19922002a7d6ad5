"""UNO rules: legal actions and state transitions.

Every transition takes a GameState and returns a new one. Illegal input
never raises: apply_action reports it as a rejected ActionResult carrying
the untouched state, and the play/draw/pass_turn/select_color shortcuts
simply hand that state back.
"""

import logging
import random
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Union

from unoengine.engine.card import STANDARD_COLORS, Card, Color
from unoengine.engine.deck import build_deck, draw_from_pile, resolve_rng, shuffle
from unoengine.engine.describe import add_log_entries, color_label, describe_card
from unoengine.engine.effects import next_seat, resolve_effect
from unoengine.engine.game_state import GamePhase, GameState, PendingColor, Player

logger = logging.getLogger(__name__)

DEFAULT_PLAYER_NAMES = ("You", "Layla", "Salem", "Adam")
STARTING_HAND_SIZE = 7
MIN_PLAYERS = 2
MAX_PLAYERS = 4


class InitializationError(RuntimeError):
    """No legal starter card could be revealed; the game cannot begin."""


@dataclass(frozen=True)
class PlayCard:
    """Action: play a card from the active hand.

    chosen_color binds a wild immediately; without it a wild opens the
    choose-color phase.
    """

    card_id: str
    chosen_color: Optional[Color] = None


@dataclass(frozen=True)
class DrawCard:
    """Action: draw one card."""


@dataclass(frozen=True)
class PassTurn:
    """Action: end the turn after drawing."""


@dataclass(frozen=True)
class ChooseColor:
    """Action: bind the color of a pending wild card."""

    color: Color


Action = Union[PlayCard, DrawCard, PassTurn, ChooseColor]


@dataclass(frozen=True)
class ActionResult:
    """Outcome of an action: the new state, or the old one and a reason."""

    state: GameState
    applied: bool
    reason: Optional[str] = None

    @classmethod
    def accepted(cls, state: GameState) -> "ActionResult":
        return cls(state=state, applied=True)

    @classmethod
    def rejected(cls, state: GameState, reason: str) -> "ActionResult":
        logger.debug("Rejected action: %s", reason)
        return cls(state=state, applied=False, reason=reason)


def _replace_player(players, index: int, player: Player):
    return players[:index] + (player,) + players[index + 1:]


def _standard_color(color) -> Optional[Color]:
    """Coerce color to a standard Color, or None if it is not one."""
    try:
        color = Color(color)
    except ValueError:
        return None
    return color if color in STANDARD_COLORS else None


def initialize(
    player_names: Sequence[str] = DEFAULT_PLAYER_NAMES,
    rng: Optional[random.Random] = None,
) -> GameState:
    """Create a new game: shuffle, deal 7 cards per seat, reveal a starter.

    Seat 0 is the human. A wild draw four may not start the game and goes
    to the bottom of the pile; a wild starter gets a random color. The
    starter's effect applies as if played by no one.
    """
    if not MIN_PLAYERS <= len(player_names) <= MAX_PLAYERS:
        raise ValueError(
            f"UNO needs {MIN_PLAYERS}-{MAX_PLAYERS} players, got {len(player_names)}"
        )
    rng = resolve_rng(rng)

    draw_pile = tuple(shuffle(build_deck(), rng))
    players = []
    for index, name in enumerate(player_names):
        hand, draw_pile = draw_pile[:STARTING_HAND_SIZE], draw_pile[STARTING_HAND_SIZE:]
        players.append(
            Player(id=f"player-{index}", name=name, is_human=index == 0).with_hand(hand)
        )

    starter: Optional[Card] = None
    for _ in range(len(draw_pile)):
        candidate, draw_pile = draw_pile[0], draw_pile[1:]
        if candidate.value == "wild-draw-four":
            draw_pile = draw_pile + (candidate,)
            continue
        starter = candidate
        break

    if starter is None:
        raise InitializationError("No valid starter card in the draw pile")

    state = GameState(
        players=tuple(players),
        current_player_index=0,
        direction=1,
        draw_pile=draw_pile,
        discard_pile=(starter,),
        current_color=rng.choice(STANDARD_COLORS) if starter.is_wild else starter.color,
        log=add_log_entries((), f"The first card is {describe_card(starter)}"),
    )

    outcome = resolve_effect(state, starter, acting_index=-1, is_initial=True, rng=rng)
    logger.info("New game for %s, starter %s", ", ".join(player_names), starter)
    return replace(
        state,
        players=outcome.players,
        draw_pile=outcome.draw_pile,
        discard_pile=outcome.discard_pile,
        direction=outcome.direction,
        current_player_index=outcome.next_player_index,
        log=add_log_entries(state.log, *outcome.messages),
    )


def is_playable(state: GameState, card: Card) -> bool:
    """Check if card may be played by the active seat right now."""
    if state.phase != GamePhase.PLAYING:
        return False
    # After drawing, only the drawn card may still be played
    if state.drawn_card_id is not None and state.drawn_card_id != card.id:
        return False
    if card.is_wild:
        return True
    top = state.top_discard()
    if top is None:
        return True
    return card.color == state.current_color or card.value == top.value


def _play(
    state: GameState,
    card_id: str,
    chosen_color: Optional[Color],
    rng: Optional[random.Random],
) -> ActionResult:
    if state.phase == GamePhase.FINISHED:
        return ActionResult.rejected(state, "game is finished")
    if state.phase == GamePhase.CHOOSE_COLOR:
        return ActionResult.rejected(state, "a color must be chosen first")

    index = state.current_player_index
    player = state.players[index]
    card = player.find_card(card_id)
    if card is None:
        return ActionResult.rejected(state, f"{card_id} is not in {player.name}'s hand")
    if not is_playable(state, card):
        return ActionResult.rejected(state, f"{describe_card(card)} cannot be played now")
    if chosen_color is not None:
        chosen_color = _standard_color(chosen_color)
        if chosen_color is None:
            return ActionResult.rejected(state, "chosen color must be a standard color")

    hand = tuple(c for c in player.hand if c.id != card.id)
    players = _replace_player(state.players, index, player.with_hand(hand))
    discard_pile = state.discard_pile + (card,)
    log = add_log_entries(state.log, f"{player.name} played {describe_card(card)}")
    if card.is_wild:
        current_color = chosen_color or state.current_color
    else:
        current_color = card.color

    if not hand:
        logger.info("%s wins after %d turns", player.name, state.turn_count)
        # turn_count is not advanced by the winning play
        return ActionResult.accepted(replace(
            state,
            players=players,
            discard_pile=discard_pile,
            current_color=current_color,
            phase=GamePhase.FINISHED,
            pending_color=None,
            winner_id=player.id,
            log=add_log_entries(log, f"{player.name} wins!"),
            drawn_card_id=None,
            last_played_card=card,
        ))

    outcome = resolve_effect(
        replace(state, players=players, discard_pile=discard_pile),
        card,
        acting_index=index,
        rng=rng,
    )
    log = add_log_entries(log, *outcome.messages)

    phase = GamePhase.PLAYING
    pending = None
    next_index = outcome.next_player_index
    if card.is_wild:
        if chosen_color is None:
            pending = PendingColor(
                player_id=player.id,
                card_id=card.id,
                next_player_index=next_index,
                value=card.value,
            )
            phase = GamePhase.CHOOSE_COLOR
            next_index = index
            log = add_log_entries(log, f"{player.name} must choose a color")
        else:
            log = add_log_entries(log, f"Color set to {color_label(chosen_color)}")

    return ActionResult.accepted(replace(
        state,
        players=outcome.players,
        draw_pile=outcome.draw_pile,
        discard_pile=outcome.discard_pile,
        direction=outcome.direction,
        current_player_index=next_index,
        current_color=current_color,
        pending_color=pending,
        phase=phase,
        log=log,
        drawn_card_id=None,
        last_played_card=card,
        turn_count=state.turn_count + 1,
    ))


def _select_color(state: GameState, color: Color) -> ActionResult:
    if state.phase != GamePhase.CHOOSE_COLOR or state.pending_color is None:
        return ActionResult.rejected(state, "no wild card is waiting for a color")
    color = _standard_color(color)
    if color is None:
        return ActionResult.rejected(state, "color must be a standard color")

    return ActionResult.accepted(replace(
        state,
        current_color=color,
        phase=GamePhase.PLAYING,
        pending_color=None,
        current_player_index=state.pending_color.next_player_index,
        log=add_log_entries(state.log, f"Color set to {color_label(color)}"),
    ))


def _draw(state: GameState, rng: Optional[random.Random]) -> ActionResult:
    if state.phase != GamePhase.PLAYING:
        return ActionResult.rejected(state, f"cannot draw during {state.phase.value}")

    drawn, draw_pile, discard_pile = draw_from_pile(
        state.draw_pile, state.discard_pile, 1, rng
    )
    if not drawn:
        return ActionResult.rejected(state, "no cards left to draw")

    index = state.current_player_index
    player = state.players[index]
    card = drawn[0]
    return ActionResult.accepted(replace(
        state,
        players=_replace_player(state.players, index, player.with_hand(player.hand + drawn)),
        draw_pile=draw_pile,
        discard_pile=discard_pile,
        log=add_log_entries(state.log, f"{player.name} draws a card"),
        drawn_card_id=card.id,
    ))


def _pass(state: GameState) -> ActionResult:
    if state.phase != GamePhase.PLAYING:
        return ActionResult.rejected(state, f"cannot pass during {state.phase.value}")
    if state.drawn_card_id is None:
        return ActionResult.rejected(state, "must draw before passing")

    return ActionResult.accepted(replace(
        state,
        current_player_index=next_seat(
            state.current_player_index, state.direction, len(state.players)
        ),
        drawn_card_id=None,
        log=add_log_entries(state.log, f"{state.current_player.name} ends the turn"),
    ))


def apply_action(
    state: GameState,
    action: Action,
    rng: Optional[random.Random] = None,
) -> ActionResult:
    """Apply an action for the active seat and return the result."""
    if isinstance(action, PlayCard):
        return _play(state, action.card_id, action.chosen_color, rng)
    if isinstance(action, DrawCard):
        return _draw(state, rng)
    if isinstance(action, PassTurn):
        return _pass(state)
    if isinstance(action, ChooseColor):
        return _select_color(state, action.color)
    raise TypeError(f"Unknown action: {action!r}")


def play(
    state: GameState,
    card_id: str,
    chosen_color: Optional[Color] = None,
    rng: Optional[random.Random] = None,
) -> GameState:
    return apply_action(state, PlayCard(card_id, chosen_color), rng).state


def draw(state: GameState, rng: Optional[random.Random] = None) -> GameState:
    return apply_action(state, DrawCard(), rng).state


def pass_turn(state: GameState) -> GameState:
    return apply_action(state, PassTurn()).state


def select_color(state: GameState, color: Color) -> GameState:
    return apply_action(state, ChooseColor(color)).state


def get_legal_actions(state: GameState) -> List[Action]:
    """Return all legal actions for the active seat."""
    if state.phase == GamePhase.FINISHED:
        return []
    if state.phase == GamePhase.CHOOSE_COLOR:
        return [ChooseColor(color) for color in STANDARD_COLORS]

    actions: List[Action] = [
        PlayCard(card.id)
        for card in state.current_player.hand
        if is_playable(state, card)
    ]
    if state.draw_pile or len(state.discard_pile) > 1:
        actions.append(DrawCard())
    if state.drawn_card_id is not None:
        actions.append(PassTurn())
    return actions
