"""Single game runner."""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional, Sequence

from unoengine.agents.greedy_agent import GreedyAgent
from unoengine.engine import (
    DEFAULT_PLAYER_NAMES,
    GamePhase,
    GameState,
    PlayerView,
    apply_action,
    get_legal_actions,
    initialize,
    run_opponent_turn,
)

if TYPE_CHECKING:
    from unoengine.agents.protocol import AgentProtocol

logger = logging.getLogger(__name__)


@dataclass
class GameResult:
    """Result of a completed game."""

    winner_id: Optional[str]
    winner_name: Optional[str]
    steps: int
    turn_count: int
    stalemate: bool
    final_state: GameState


class GameRunner:
    """Runs a single UNO game to completion.

    Holds the only copy of the current state, so the human seat and the
    scripted opponents never act on the same snapshot. Without a human
    agent the human seat is played by a GreedyAgent.
    """

    def __init__(
        self,
        human_agent: Optional["AgentProtocol"] = None,
        player_names: Sequence[str] = DEFAULT_PLAYER_NAMES,
        rng: Optional[random.Random] = None,
        opponent_delay: float = 0.0,
        max_steps: int = 2000,
        on_state: Optional[Callable[[GameState], None]] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._rng = rng if rng is not None else random.Random()
        self._human = human_agent if human_agent is not None else GreedyAgent(rng=self._rng)
        self._names = tuple(player_names)
        self._delay = opponent_delay
        self._max_steps = max_steps
        self._on_state = on_state
        self._sleep = sleep
        self.state: Optional[GameState] = None

    def _human_step(self, state: GameState) -> Optional[GameState]:
        """One action for the human seat; None if it has nothing legal to do."""
        legal = get_legal_actions(state)
        if not legal:
            return None
        view = PlayerView.from_state(state, state.current_player_index)
        action = self._human.get_action(view, legal)
        result = apply_action(state, action, self._rng)
        if not result.applied:
            logger.info("Human action rejected: %s", result.reason)
        return result.state

    def _opponent_step(self, state: GameState) -> Optional[GameState]:
        if self._delay > 0:
            self._sleep(self._delay)
        result = run_opponent_turn(state, self._rng)
        return result.state if result.applied else None

    def run(self) -> GameResult:
        """Run the game and return the result."""
        state = initialize(self._names, rng=self._rng)
        self._publish(state)
        steps = 0
        stalemate = False

        while state.phase != GamePhase.FINISHED and steps < self._max_steps:
            seat = state.current_player
            if seat.is_human:
                new_state = self._human_step(state)
            else:
                new_state = self._opponent_step(state)

            if new_state is None:
                logger.info("Stalemate: %s cannot act", seat.name)
                stalemate = True
                break
            state = new_state
            steps += 1
            self._publish(state)

        winner = None
        if state.winner_id is not None:
            winner = state.players[state.player_index(state.winner_id)].name
        return GameResult(
            winner_id=state.winner_id,
            winner_name=winner,
            steps=steps,
            turn_count=state.turn_count,
            stalemate=stalemate,
            final_state=state,
        )

    def _publish(self, state: GameState) -> None:
        self.state = state
        if self._on_state is not None:
            self._on_state(state)
