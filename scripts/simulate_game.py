"""Simulate a game where every seat is scripted."""

import random

from unoengine.orchestration.game_runner import GameRunner


def main():
    runner = GameRunner(rng=random.Random(42))
    result = runner.run()

    # The log keeps the latest 60 events, most recent first
    for entry in reversed(result.final_state.log):
        print(f"> {entry}")

    print(f"Game finished! Winner: {result.winner_name}")
    print(f"Turns: {result.turn_count}")
    print(f"Cards in play: {result.final_state.total_cards()}")


if __name__ == "__main__":
    main()
