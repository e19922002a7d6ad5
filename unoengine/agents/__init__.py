"""Built-in agents."""

from unoengine.agents.greedy_agent import GreedyAgent
from unoengine.agents.human_agent import HumanAgent

__all__ = ["GreedyAgent", "HumanAgent"]
