"""Card and Color types for UNO."""

from dataclasses import dataclass
from enum import Enum


class Color(str, Enum):
    """Card colors. WILD is only ever printed on wild cards, never bound."""

    RED = "red"
    YELLOW = "yellow"
    GREEN = "green"
    BLUE = "blue"
    WILD = "wild"


STANDARD_COLORS = (Color.RED, Color.YELLOW, Color.GREEN, Color.BLUE)

NUMBER_VALUES = ("0", "1", "2", "3", "4", "5", "6", "7", "8", "9")
ACTION_VALUES = ("skip", "reverse", "draw-two")
WILD_VALUES = ("wild", "wild-draw-four")

CARD_VALUES = NUMBER_VALUES + ACTION_VALUES + WILD_VALUES


@dataclass(frozen=True)
class Card:
    """A UNO card.

    Identity is the id: two cards may share color and value.
    Number/action cards carry one of the four standard colors, wild cards
    always carry Color.WILD (the chosen color lives in the game state).
    """

    id: str
    color: Color
    value: str

    def __post_init__(self) -> None:
        if self.value not in CARD_VALUES:
            raise ValueError(f"Invalid card value: {self.value}")
        if self.value in WILD_VALUES and self.color is not Color.WILD:
            raise ValueError("Wild cards must have color=wild")
        if self.value not in WILD_VALUES and self.color not in STANDARD_COLORS:
            raise ValueError("Non-wild cards must have a standard color")

    @property
    def is_wild(self) -> bool:
        return self.value in WILD_VALUES

    def __str__(self) -> str:
        if self.is_wild:
            return self.value
        return f"{self.color.value}_{self.value}"
