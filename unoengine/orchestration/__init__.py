"""Game orchestration."""

from unoengine.orchestration.game_runner import GameResult, GameRunner
from unoengine.orchestration.simulation import SimulationSummary, run_simulation

__all__ = ["GameResult", "GameRunner", "SimulationSummary", "run_simulation"]
