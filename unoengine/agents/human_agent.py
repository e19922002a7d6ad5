"""Human agent - reads actions from terminal."""

import typer

from unoengine.engine import Action, ChooseColor, DrawCard, PassTurn, PlayCard, PlayerView
from unoengine.engine.describe import color_label, describe_card, format_hand


def _describe_action(action: Action, view: PlayerView) -> str:
    if isinstance(action, DrawCard):
        return "DRAW"
    if isinstance(action, PassTurn):
        return "PASS"
    if isinstance(action, ChooseColor):
        return f"COLOR {color_label(action.color)}"
    card = next(c for c in view.my_hand if c.id == action.card_id)
    return f"PLAY {describe_card(card)}"


class HumanAgent:
    """Agent that prompts the human for input via terminal."""

    def __init__(self, name: str = "human"):
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def get_action(self, player_view: PlayerView, legal_actions: list[Action]) -> Action:
        typer.echo("\n--- Your turn ---")
        typer.echo(f"Your hand: {format_hand(player_view.my_hand)}")
        if player_view.top_discard is not None:
            typer.echo(
                f"Top discard: {describe_card(player_view.top_discard)} "
                f"(color to match: {color_label(player_view.current_color)})"
            )
        counts = ", ".join(
            f"{name}: {count}"
            for name, count in zip(
                player_view.player_names, player_view.num_cards_per_player.values()
            )
        )
        typer.echo(f"Cards held: {counts}")
        typer.echo("\nLegal actions:")
        for i, action in enumerate(legal_actions):
            typer.echo(f"  {i}: {_describe_action(action, player_view)}")

        while True:
            try:
                raw = input("Enter number: ").strip()
                idx = int(raw)
                if 0 <= idx < len(legal_actions):
                    return legal_actions[idx]
            except ValueError:
                pass
            except EOFError:
                raise typer.Abort()
            typer.echo("Invalid. Try again.")
