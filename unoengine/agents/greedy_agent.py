"""Scripted agent that follows the opponent policy one step at a time."""

import random
from typing import Optional

from unoengine.engine import Action, ChooseColor, DrawCard, PassTurn, PlayCard, PlayerView
from unoengine.engine.opponent import choose_best_color, pick_card


class GreedyAgent:
    """Plays its seat the way the scripted opponents do."""

    def __init__(self, name: str = "greedy", rng: Optional[random.Random] = None):
        self._name = name
        self._rng = rng if rng is not None else random.Random()

    @property
    def name(self) -> str:
        return self._name

    def get_action(self, player_view: PlayerView, legal_actions: list[Action]) -> Action:
        if any(isinstance(a, ChooseColor) for a in legal_actions):
            return ChooseColor(choose_best_color(player_view.my_hand, self._rng))

        playable_ids = {a.card_id for a in legal_actions if isinstance(a, PlayCard)}
        playable = [c for c in player_view.my_hand if c.id in playable_ids]
        if playable:
            card = pick_card(playable)
            if not card.is_wild:
                return PlayCard(card.id)
            rest = [c for c in player_view.my_hand if c.id != card.id]
            return PlayCard(card.id, choose_best_color(rest, self._rng))

        for kind in (PassTurn, DrawCard):
            for action in legal_actions:
                if isinstance(action, kind):
                    return action
        return legal_actions[0]
