"""Game engine for UNO."""

from unoengine.engine.card import STANDARD_COLORS, Card, Color
from unoengine.engine.deck import build_deck, recycle_discard, shuffle
from unoengine.engine.game_state import GamePhase, GameState, PendingColor, Player, PlayerView
from unoengine.engine.opponent import run_opponent_turn, take_opponent_turn
from unoengine.engine.rules import (
    DEFAULT_PLAYER_NAMES,
    Action,
    ActionResult,
    ChooseColor,
    DrawCard,
    InitializationError,
    PassTurn,
    PlayCard,
    apply_action,
    draw,
    get_legal_actions,
    initialize,
    is_playable,
    pass_turn,
    play,
    select_color,
)

__all__ = [
    "STANDARD_COLORS",
    "Card",
    "Color",
    "build_deck",
    "recycle_discard",
    "shuffle",
    "GamePhase",
    "GameState",
    "PendingColor",
    "Player",
    "PlayerView",
    "run_opponent_turn",
    "take_opponent_turn",
    "DEFAULT_PLAYER_NAMES",
    "Action",
    "ActionResult",
    "ChooseColor",
    "DrawCard",
    "InitializationError",
    "PassTurn",
    "PlayCard",
    "apply_action",
    "draw",
    "get_legal_actions",
    "initialize",
    "is_playable",
    "pass_turn",
    "play",
    "select_color",
]
