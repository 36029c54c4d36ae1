"""
Spellsearch CLI - Command-line interface for the search engine.

Usage:
    spellsearch solve [--ceiling N] [--health H] ...   Search for the best move sequence
    spellsearch actions [--health H]                   List legal moves from the start
"""

import argparse
import logging
import sys

from pydantic import ValidationError

# The frontier can stall below the node ceiling, so solve always runs under a clock cap.
DEFAULT_MAX_SECONDS = 60.0


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Spellsearch - Best-first solver for the dice/spell puzzle",
        prog="spellsearch",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Solve command
    solve_parser = subparsers.add_parser("solve", help="Run the best-first search")
    _add_puzzle_arguments(solve_parser)
    solve_parser.add_argument("--ceiling", type=int, default=1_000_000, help="Frontier node ceiling")
    solve_parser.add_argument("--interval", type=float, default=1.0, help="Seconds between progress lines")
    solve_parser.add_argument("--check-every", type=int, default=1000, help="Iterations between clock reads")
    solve_parser.add_argument("--max-iterations", type=int, default=None, help="Optional iteration cap")
    solve_parser.add_argument(
        "--max-seconds", type=float, default=DEFAULT_MAX_SECONDS, help="Wall-clock cap in seconds"
    )
    solve_parser.add_argument(
        "--no-path", action="store_true", help="Drop parent links; report only the best state"
    )
    solve_parser.add_argument(
        "--prep-policy",
        choices=["first_open_slot", "all_open_slots"],
        default="first_open_slot",
        help="Which open slots get prep moves",
    )

    # Actions command
    actions_parser = subparsers.add_parser("actions", help="List legal moves from the start")
    _add_puzzle_arguments(actions_parser)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "solve":
        return cmd_solve(args)
    elif args.command == "actions":
        return cmd_actions(args)
    else:
        parser.print_help()
        return 1


def _add_puzzle_arguments(parser):
    parser.add_argument("--health", type=int, default=105, help="Enemy starting health")
    parser.add_argument(
        "--dice",
        type=int,
        nargs=6,
        default=None,
        metavar="N",
        help="Starting dice count per face (six numbers, ones first)",
    )


def _puzzle_config(args):
    from .config import PuzzleConfig

    values = {"enemy_health": args.health}
    if args.dice is not None:
        values["dice"] = args.dice
    return PuzzleConfig(**values)


def cmd_solve(args):
    """Run the search and print the best line found."""
    from .config import SearchConfig
    from .games.harvest import setup_puzzle
    from .search import BestFirstSearch, PrintReporter, render_state

    try:
        puzzle = _puzzle_config(args)
        config = SearchConfig(
            node_ceiling=args.ceiling,
            telemetry_interval=args.interval,
            telemetry_check_every=args.check_every,
            max_iterations=args.max_iterations,
            max_seconds=args.max_seconds,
            prep_policy=args.prep_policy,
            track_path=not args.no_path,
        )
    except ValidationError as e:
        print(f"Error: invalid configuration\n{e}")
        return 2

    initial = setup_puzzle(puzzle)
    print(f"Start: {render_state(initial)}")

    engine = BestFirstSearch(config=config, reporter=PrintReporter())
    result = engine.run(initial)

    print(f"\nStopped: {result.stop_reason.value}")
    print(f"Iterations: {result.iterations}")
    print(f"Frontier: {result.frontier_size}")
    print(f"Elapsed: {result.elapsed:.2f}s")
    print(f"Best depth: {result.best_depth}")
    print(f"Best: {render_state(result.best_state)}")

    path = result.best.path()
    if path:
        print("\nMoves:")
        for i, (action, before) in enumerate(path, start=1):
            print(f"  {i}. {action.describe(before)}")
    return 0


def cmd_actions(args):
    """List the legal actions from the starting position."""
    from .games.harvest import setup_puzzle
    from .engine_core.action_generator import legal_actions
    from .search import render_state

    try:
        puzzle = _puzzle_config(args)
    except ValidationError as e:
        print(f"Error: invalid configuration\n{e}")
        return 2

    state = setup_puzzle(puzzle)
    print(f"State: {render_state(state)}")
    for action in legal_actions(state):
        print(f"  - {action.describe(state)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
