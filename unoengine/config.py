"""Runtime settings read from the environment (and .env via python-dotenv)."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from unoengine.engine.rules import DEFAULT_PLAYER_NAMES, MAX_PLAYERS, MIN_PLAYERS

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(ValueError):
    """An environment variable holds a value we cannot use."""


def parse_player_names(raw: str) -> Tuple[str, ...]:
    names = tuple(n.strip() for n in raw.split(",") if n.strip())
    if not MIN_PLAYERS <= len(names) <= MAX_PLAYERS:
        raise ConfigError(f"Need {MIN_PLAYERS}-{MAX_PLAYERS} player names, got {len(names)}")
    return names


@dataclass(frozen=True)
class Settings:
    seed: Optional[int] = None
    opponent_delay: float = 0.8  # seconds before each scripted move
    player_names: Tuple[str, ...] = DEFAULT_PLAYER_NAMES
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        defaults = cls()

        seed = defaults.seed
        if env.get("UNO_SEED"):
            try:
                seed = int(env["UNO_SEED"])
            except ValueError:
                raise ConfigError(f"UNO_SEED must be an integer, got {env['UNO_SEED']!r}")

        delay = defaults.opponent_delay
        if env.get("UNO_OPPONENT_DELAY"):
            try:
                delay = float(env["UNO_OPPONENT_DELAY"])
            except ValueError:
                raise ConfigError(
                    f"UNO_OPPONENT_DELAY must be a number, got {env['UNO_OPPONENT_DELAY']!r}"
                )
            if delay < 0:
                raise ConfigError("UNO_OPPONENT_DELAY cannot be negative")

        names = defaults.player_names
        if env.get("UNO_PLAYER_NAMES"):
            names = parse_player_names(env["UNO_PLAYER_NAMES"])

        level = env.get("UNO_LOG_LEVEL", defaults.log_level).upper()
        if level not in LOG_LEVELS:
            raise ConfigError(f"UNO_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")

        return cls(seed=seed, opponent_delay=delay, player_names=names, log_level=level)
