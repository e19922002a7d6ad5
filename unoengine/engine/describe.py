"""Human-readable card labels and the bounded event log."""

from typing import Iterable, Tuple

from unoengine.engine.card import Card, Color

LOG_LIMIT = 60

COLOR_LABELS = {
    Color.RED: "red",
    Color.YELLOW: "yellow",
    Color.GREEN: "green",
    Color.BLUE: "blue",
    Color.WILD: "wild",
}

VALUE_LABELS = {
    "skip": "skip",
    "reverse": "reverse",
    "draw-two": "draw two",
    "wild": "wild",
    "wild-draw-four": "wild draw four",
}


def color_label(color: Color) -> str:
    return COLOR_LABELS[color]


def describe_card(card: Card) -> str:
    """Return e.g. "red 5", "blue draw two" or "wild draw four"."""
    value = VALUE_LABELS.get(card.value, card.value)
    if card.is_wild:
        return value
    return f"{color_label(card.color)} {value}"


def add_log_entries(log: Tuple[str, ...], *entries: str) -> Tuple[str, ...]:
    """Prepend entries in the order they happened, keeping LOG_LIMIT of them."""
    new_log = log
    for entry in entries:
        new_log = (entry,) + new_log
    return new_log[:LOG_LIMIT]


def format_hand(cards: Iterable[Card]) -> str:
    return ", ".join(describe_card(c) for c in cards)
