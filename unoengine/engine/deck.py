"""Deck creation, shuffling and discard pile recycling."""

import logging
import random
from typing import List, Optional, Sequence, Tuple

from unoengine.engine.card import ACTION_VALUES, NUMBER_VALUES, STANDARD_COLORS, Card, Color

logger = logging.getLogger(__name__)

Pile = Tuple[Card, ...]


def resolve_rng(rng: Optional[random.Random]) -> random.Random:
    """Return the given random source, or a fresh one for this call."""
    return rng if rng is not None else random.Random()


def build_deck() -> List[Card]:
    """Create a standard 108-card UNO deck, in a fixed order.

    - 4 colors x (one 0, two each of 1-9, Skip, Reverse, Draw Two): 100 cards
    - 4 Wild, 4 Wild Draw Four: 8 cards
    - Total: 108 cards, ids card-0 .. card-107
    """
    cards: List[Card] = []

    def add(color: Color, value: str) -> None:
        cards.append(Card(id=f"card-{len(cards)}", color=color, value=value))

    for color in STANDARD_COLORS:
        add(color, "0")
        for value in NUMBER_VALUES[1:] + ACTION_VALUES:
            add(color, value)
            add(color, value)

    for _ in range(4):
        add(Color.WILD, "wild")
        add(Color.WILD, "wild-draw-four")

    return cards


def shuffle(cards: Sequence[Card], rng: Optional[random.Random] = None) -> List[Card]:
    """Return a uniformly random permutation of cards (Fisher-Yates)."""
    rng = resolve_rng(rng)
    deck = list(cards)
    for i in range(len(deck) - 1, 0, -1):
        j = rng.randrange(i + 1)
        deck[i], deck[j] = deck[j], deck[i]
    return deck


def recycle_discard(
    draw_pile: Pile,
    discard_pile: Pile,
    rng: Optional[random.Random] = None,
) -> Tuple[Pile, Pile]:
    """Refill an empty draw pile from the discard pile.

    The top discard stays where it is; everything under it is shuffled into
    the new draw pile. Nothing happens while the draw pile still has cards
    or the discard pile holds one card or fewer.
    """
    if draw_pile or len(discard_pile) <= 1:
        return draw_pile, discard_pile

    top = discard_pile[-1]
    new_draw = tuple(shuffle(discard_pile[:-1], rng))
    logger.debug("Recycled %d discards into the draw pile", len(new_draw))
    return new_draw, (top,)


def draw_from_pile(
    draw_pile: Pile,
    discard_pile: Pile,
    count: int,
    rng: Optional[random.Random] = None,
) -> Tuple[Pile, Pile, Pile]:
    """Take up to count cards off the top of the draw pile.

    Recycles the discard pile whenever the draw pile runs out. Returns
    (drawn, draw_pile, discard_pile); drawn is shorter than count only when
    no card is left anywhere to draw.
    """
    drawn: List[Card] = []
    for _ in range(count):
        draw_pile, discard_pile = recycle_discard(draw_pile, discard_pile, rng)
        if not draw_pile:
            break
        drawn.append(draw_pile[0])
        draw_pile = draw_pile[1:]
    return tuple(drawn), draw_pile, discard_pile
