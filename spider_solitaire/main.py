"""Main entry point for the terminal Spider Solitaire game."""

import argparse
import datetime
import logging
import sys
import time
from pathlib import Path

from spider_solitaire.config import Config, load_config
from spider_solitaire.game.daily import DailyChallenge, challenge_for_seed, daily_challenge
from spider_solitaire.game.engine import GameEngine
from spider_solitaire.logging import GameLogConfig, GameLogger
from spider_solitaire.storage import SaveStore
from spider_solitaire.utils.logger import GameDisplay, setup_logging

logger = logging.getLogger(__name__)

HELP_TEXT = """Commands:
  m FROM INDEX TO   move the run starting at card INDEX of column FROM to column TO
  d                 deal one card from the stock onto every column
  u                 undo the last move
  h                 show a hint
  s                 save the game
  q                 save and quit"""


def generate_log_filename(log_dir: str, seed: int | None) -> str:
    """Generate log filename with timestamp and seed.

    Format: {timestamp}_{seed or "random"}.jsonl
    """
    timestamp = datetime.datetime.now().strftime("%Y%m%dT%H%M%S")
    suffix = "random" if seed is None else str(seed)
    return str(Path(log_dir) / f"{timestamp}_{suffix}.jsonl")


def apply_overrides(config: Config, args: argparse.Namespace) -> Config:
    """Apply command-line overrides to the (frozen) config."""
    game = config.game
    if args.difficulty:
        game = game.model_copy(update={"difficulty": args.difficulty})
    if args.seed is not None:
        game = game.model_copy(update={"seed": args.seed})

    log_settings = config.logging
    if args.verbose:
        log_settings = log_settings.model_copy(update={"level": "DEBUG"})

    storage = config.storage
    if args.save:
        storage = storage.model_copy(update={"path": str(args.save)})

    game_log = config.game_log
    if args.game_log:
        game_log = game_log.model_copy(update={"enabled": True, "output_path": str(args.game_log)})

    return config.model_copy(
        update={"game": game, "logging": log_settings, "storage": storage, "game_log": game_log}
    )


def run_game(
    engine: GameEngine,
    store: SaveStore,
    display: GameDisplay,
    challenge: DailyChallenge | None = None,
) -> None:
    """Read commands from stdin until the game is won or the player quits."""
    print(HELP_TEXT)
    last_tick = time.monotonic()

    while not engine.is_won:
        display.print_board(engine)
        try:
            line = input("> ").strip().lower()
        except EOFError:
            line = "q"

        now = time.monotonic()
        engine.tick(now - last_tick)
        last_tick = now

        parts = line.split()
        if not parts:
            continue
        command, params = parts[0], parts[1:]

        if command == "q":
            store.save_game(engine.snapshot())
            print("Game saved.")
            return
        if command == "s":
            store.save_game(engine.snapshot())
            print("Game saved.")
            continue
        if command == "h":
            display.print_hint(engine.hint(), engine.can_draw())
            continue

        if command == "d":
            result = engine.draw_from_stock()
        elif command == "u":
            result = engine.undo()
        elif command == "m" and len(params) == 3 and all(p.isdigit() for p in params):
            from_column, card_index, to_column = (int(p) for p in params)
            result = engine.move_run(from_column, card_index, to_column)
        else:
            print(HELP_TEXT)
            continue

        if not result.ok:
            display.print_error(result.message)
            continue
        for sequence in result.completed:
            print(f"  Completed a sequence in column {sequence.column}!")

    display.print_win(engine)
    store.clear_saved_game()
    stats = store.record_game(True, engine.final_score or engine.score, engine.elapsed_time)
    display.print_statistics(stats)
    if challenge is not None:
        record = store.record_challenge(
            challenge.date, engine.final_score or engine.score, engine.elapsed_time
        )
        print(f"Challenge best: {record.best_score}")


def main() -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success)
    """
    parser = argparse.ArgumentParser(description="Spider Solitaire in the terminal")
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help="Path to config file (YAML)",
    )
    parser.add_argument(
        "-d",
        "--difficulty",
        type=int,
        choices=[1, 2, 4],
        help="Number of suits (overrides config)",
    )
    parser.add_argument(
        "-s",
        "--seed",
        type=int,
        help="Shuffle seed (overrides config)",
    )
    parser.add_argument(
        "--daily",
        action="store_true",
        help="Play today's daily challenge",
    )
    parser.add_argument(
        "--resume",
        action="store_true",
        help="Resume the saved game",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "--game-log",
        type=Path,
        help="Directory for game log files (filename auto-generated)",
    )
    parser.add_argument(
        "--save",
        type=Path,
        help="Save file path (overrides config)",
    )

    args = parser.parse_args()

    config = apply_overrides(load_config(args.config), args)
    setup_logging(config.logging.level)
    display = GameDisplay(show_face_down=config.logging.show_face_down)

    challenge = daily_challenge(datetime.date.today()) if args.daily else None
    seed = challenge.seed if challenge else config.game.seed

    if config.game_log.enabled:
        log_config = GameLogConfig(
            enabled=True,
            output_path=generate_log_filename(config.game_log.output_path, seed),
        )
    else:
        log_config = GameLogConfig(enabled=False)

    try:
        store = SaveStore(config.storage.path)
        with GameLogger(log_config) as game_logger:
            engine = GameEngine(config, game_logger)

            if args.resume and store.has_saved_game():
                result = engine.restore(store.load_game())
                if not result.ok:
                    print(f"Saved game is damaged: {result.message}")
                    return 1
                print("Resumed saved game.")
                # A resumed game only counts for the challenge it was dealt from
                challenge = challenge_for_seed(engine.seed) if engine.is_challenge else None
            elif challenge is not None:
                print(f"Daily challenge: {challenge.name} ({challenge.difficulty.name})")
                record = store.challenge_record(challenge.date)
                if record.completed:
                    print(f"Already completed, best score {record.best_score}")
                engine.new_game(challenge.difficulty, challenge.seed, is_challenge=True)
            else:
                engine.new_game()

            run_game(engine, store, display, challenge)
        return 0

    except KeyboardInterrupt:
        print("\nGame interrupted by user")
        return 1
    except Exception as e:
        logger.exception(f"Game error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
