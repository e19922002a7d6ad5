"""Agent protocol - interface that human and scripted agents implement."""

from typing import Protocol

from unoengine.engine import Action, PlayerView


class AgentProtocol(Protocol):
    """Interface for UNO-playing agents."""

    @property
    def name(self) -> str:
        """Display name for the agent."""
        ...

    def get_action(
        self,
        player_view: PlayerView,
        legal_actions: list[Action],
    ) -> Action:
        """Choose an action given the player view and legal actions.

        Args:
            player_view: Filtered view with only this seat's hand and public info.
            legal_actions: Non-empty list of valid actions to choose from.

        Returns:
            One of the legal actions.
        """
        ...
