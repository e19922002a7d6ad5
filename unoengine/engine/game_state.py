"""Game state for UNO."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, List, Optional, Tuple

from unoengine.engine.card import Card, Color


class GamePhase(str, Enum):
    """Where the game is in its turn cycle."""

    PLAYING = "playing"
    CHOOSE_COLOR = "choose-color"
    FINISHED = "finished"


@dataclass(frozen=True)
class Player:
    """A seat at the table. said_uno tracks hand size, nothing enforces it."""

    id: str
    name: str
    hand: Tuple[Card, ...] = ()
    is_human: bool = False
    said_uno: bool = False

    def with_hand(self, hand: Tuple[Card, ...]) -> "Player":
        return replace(self, hand=tuple(hand), said_uno=len(hand) == 1)

    def find_card(self, card_id: str) -> Optional[Card]:
        return next((c for c in self.hand if c.id == card_id), None)


@dataclass(frozen=True)
class PendingColor:
    """A wild card waiting for its color, and the seat that plays next."""

    player_id: str
    card_id: str
    next_player_index: int
    value: str  # "wild" or "wild-draw-four"


@dataclass(frozen=True)
class GameState:
    """Immutable UNO game state. Every action returns a new one."""

    players: Tuple[Player, ...]
    current_player_index: int
    direction: int  # 1 = seat order, -1 = reversed
    draw_pile: Tuple[Card, ...]  # top is first
    discard_pile: Tuple[Card, ...]  # top is last
    current_color: Color
    phase: GamePhase = GamePhase.PLAYING
    pending_color: Optional[PendingColor] = None
    winner_id: Optional[str] = None
    log: Tuple[str, ...] = field(default_factory=tuple)  # most recent first
    drawn_card_id: Optional[str] = None
    last_played_card: Optional[Card] = None
    turn_count: int = 0

    def top_discard(self) -> Optional[Card]:
        """Return the top card on the discard pile."""
        return self.discard_pile[-1] if self.discard_pile else None

    @property
    def current_player(self) -> Player:
        return self.players[self.current_player_index]

    def player_index(self, player_id: str) -> int:
        for i, player in enumerate(self.players):
            if player.id == player_id:
                return i
        raise KeyError(player_id)

    def total_cards(self) -> int:
        """Cards across both piles and every hand; 108 for a dealt game."""
        return (
            len(self.draw_pile)
            + len(self.discard_pile)
            + sum(len(p.hand) for p in self.players)
        )


@dataclass
class PlayerView:
    """Filtered game state visible to a single seat.

    Contains only that seat's hand and public info.
    """

    seat_index: int
    player_id: str
    my_hand: List[Card]
    top_discard: Optional[Card]
    current_color: Color
    current_player_index: int
    direction: int
    phase: GamePhase
    winner_id: Optional[str]
    drawn_card_id: Optional[str]
    player_names: Tuple[str, ...]
    num_cards_per_player: Dict[str, int]  # player_id -> count
    draw_pile_size: int
    history: List[str]  # Recent game events, most recent first

    @classmethod
    def from_state(cls, state: GameState, seat_index: int) -> "PlayerView":
        """Create a view for one seat, hiding every other hand."""
        me = state.players[seat_index]
        is_my_turn = state.current_player_index == seat_index
        return cls(
            seat_index=seat_index,
            player_id=me.id,
            my_hand=list(me.hand),
            top_discard=state.top_discard(),
            current_color=state.current_color,
            current_player_index=state.current_player_index,
            direction=state.direction,
            phase=state.phase,
            winner_id=state.winner_id,
            drawn_card_id=state.drawn_card_id if is_my_turn else None,
            player_names=tuple(p.name for p in state.players),
            num_cards_per_player={p.id: len(p.hand) for p in state.players},
            draw_pile_size=len(state.draw_pile),
            history=list(state.log[:10]),  # Last 10 events
        )
