"""Simulation - run many autoplay games and aggregate results."""

import random
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Optional, Sequence

from unoengine.engine import DEFAULT_PLAYER_NAMES
from unoengine.orchestration.game_runner import GameRunner


@dataclass
class SimulationSummary:
    games: int
    wins: Dict[str, int]  # player name -> games won
    stalemates: int
    average_turns: float


def run_simulation(
    num_games: int = 100,
    seed: Optional[int] = None,
    player_names: Sequence[str] = DEFAULT_PLAYER_NAMES,
) -> SimulationSummary:
    """Play num_games games where every seat follows the greedy policy.

    Each game gets its own seed drawn from one generator, so a seed
    reproduces the whole batch.
    """
    wins: Dict[str, int] = defaultdict(int)
    stalemates = 0
    total_turns = 0

    rng = random.Random(seed)
    for _ in range(num_games):
        runner = GameRunner(
            player_names=player_names,
            rng=random.Random(rng.randint(0, 2**31 - 1)),
        )
        result = runner.run()
        total_turns += result.turn_count
        if result.winner_name:
            wins[result.winner_name] += 1
        elif result.stalemate:
            stalemates += 1

    return SimulationSummary(
        games=num_games,
        wins=dict(wins),
        stalemates=stalemates,
        average_turns=total_turns / num_games if num_games else 0.0,
    )
