"""Main entry point for freecli."""

import argparse
import logging
import sys
from pathlib import Path

import yaml

from freecli.config import Config, load_config
from freecli.game.engine import GameEngine, UndoStatus
from freecli.logging import GameLogger
from freecli.models.card import MAX_SEED
from freecli.models.move import Move, MoveParseError, build_move
from freecli.models.stats import GameStats
from freecli.storage import SaveStore
from freecli.utils.logger import GameDisplay, setup_logging

logger = logging.getLogger(__name__)

# Exit codes
EXIT_OK = 0
EXIT_ERROR = 1
EXIT_USAGE = 2


def seed_value(text: str) -> int:
    """Parse an unsigned 64-bit seed argument."""
    try:
        seed = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid seed: {text!r}") from None
    if not 0 <= seed <= MAX_SEED:
        raise argparse.ArgumentTypeError(f"seed must be between 0 and {MAX_SEED}")
    return seed


def build_parser() -> argparse.ArgumentParser:
    """Create the command line parser."""
    parser = argparse.ArgumentParser(
        prog="freecli",
        description="A Freecell CLI interface. Each run applies at most one move.",
        epilog="Locations: c0-c7 (columns), f0-f3 (freecells), foundation. "
        "Example: freecli c3 f0",
    )
    parser.add_argument(
        "locations",
        nargs="*",
        metavar="LOCATION",
        help="Move source and destination (give both, or none to just show the board)",
    )
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Deal a new game",
    )
    parser.add_argument(
        "--seed",
        type=seed_value,
        help="Seed for the new deal (used with --reset or when no game is saved)",
    )
    parser.add_argument(
        "--print",
        action="store_true",
        help="Only print the board",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Only print play statistics",
    )
    parser.add_argument(
        "--history",
        action="store_true",
        help="Only print the moves of the current game",
    )
    parser.add_argument(
        "--undo",
        action="store_true",
        help="Undo the last move",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help="Path to config file (YAML)",
    )
    parser.add_argument(
        "--save-dir",
        type=Path,
        help="Directory for save files (overrides config)",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Print the board without colors",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    return parser


def run_move(
    engine: GameEngine,
    move: Move,
    stats: GameStats,
    display: GameDisplay,
    game_logger: GameLogger,
) -> None:
    """Apply a move and record its outcome.

    A rejected move only sets last_move_error; the board is unchanged.
    """
    state = engine.state
    state.clear_error()

    result = engine.apply_move(move)
    if not result.success:
        state.last_move_error = result.error_message
        game_logger.log_rejected(state.seed, move, result.error_message)
        return

    stats.record_move()
    game_logger.log_move(state.seed, result.move, result.card, len(state.history))

    if engine.is_win():
        stats.record_win()
        game_logger.log_win(state, stats)
        display.print_win(stats)


def run_undo(engine: GameEngine, display: GameDisplay, game_logger: GameLogger) -> None:
    """Undo the last move and report the outcome.

    A won game is over and its winning move cannot be taken back.
    """
    state = engine.state
    state.clear_error()

    if engine.is_win():
        state.last_move_error = "The game is won. Use --reset to deal a new game."
        return

    result = engine.undo()
    if result.status == UndoStatus.NOTHING_TO_UNDO:
        display.print_message("Nothing to undo.")
    elif result.status == UndoStatus.FAILED:
        state.last_move_error = result.error_message
    else:
        game_logger.log_undo(state.seed, result.move, result.card)
        display.print_message(f"Undid {result.move}")


def play(
    args: argparse.Namespace,
    move: Move | None,
    store: SaveStore,
    display: GameDisplay,
    game_logger: GameLogger,
) -> int:
    """Run one invocation against the saved game.

    Returns:
        Exit code
    """
    stats = store.load_stats()
    state = None if args.reset else store.load_game()
    engine = GameEngine(state)

    if state is None:
        if not args.reset:
            display.print_message("No saved game found, or save corrupted. Dealing a new game.")
        engine.reset(args.seed)
        stats.record_game_start()
        game_logger.log_game_start(engine.state)
    elif args.seed is not None:
        logger.warning("--seed ignored: a game is in progress (use --reset to deal a new one)")

    if args.undo:
        run_undo(engine, display, game_logger)
    elif move is not None:
        run_move(engine, move, stats, display, game_logger)

    store.save_game(engine.state)
    store.save_stats(stats)

    if args.stats:
        display.print_stats(stats)
    elif args.history:
        display.print_history(engine.state.history)
    else:
        display.print_board(engine.state)
    return EXIT_OK


def apply_overrides(config: Config, args: argparse.Namespace) -> None:
    """Apply command-line overrides to the loaded config."""
    if args.save_dir:
        config.storage.save_dir = str(args.save_dir)
    if args.verbose:
        config.logging.level = "DEBUG"
    if args.no_color:
        config.display.color = False


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Args:
        argv: Command line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if (args.print or args.stats or args.history) and (args.locations or args.undo):
        parser.error("--print, --stats and --history cannot be combined with a move or --undo")
    if args.undo and args.locations:
        parser.error("--undo cannot be combined with a move")

    # Load config
    try:
        config = load_config(args.config)
    except (ValueError, yaml.YAMLError) as e:
        parser.error(f"invalid config {args.config}: {e}")
    apply_overrides(config, args)

    # Setup logging
    setup_logging(config.logging.level)

    display = GameDisplay(
        color=config.display.color,
        show_seed=config.display.show_seed,
    )

    try:
        move = build_move(args.locations)
    except MoveParseError as e:
        display.print_error(f"Invalid move: {e}")
        return EXIT_USAGE

    store = SaveStore.from_config(config.storage)

    try:
        with GameLogger(config.game_log, base_dir=store.save_dir) as game_logger:
            return play(args, move, store, display, game_logger)
    except OSError as e:
        logger.error(f"Cannot access save files in {store.save_dir}: {e}")
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
