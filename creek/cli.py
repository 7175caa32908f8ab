"""
Creek CLI - Command-line interface for the engine.

Usage:
    creek board                        Print the board
    creek classify [cards_file]        Classify a card catalog
    creek simulate --bots 4 --seed 7   Play an all-bot game
"""

import argparse
import sys

from .config import CREEK_LOG_LEVEL
from .logging_config import setup_logging


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Creek - Up Shitz Creek rule engine",
        prog="creek",
    )
    parser.add_argument("--log-level", default=CREEK_LOG_LEVEL, help="Logging level")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Board command
    subparsers.add_parser("board", help="Print the board")

    # Classify command
    classify_parser = subparsers.add_parser("classify", help="Classify a card catalog")
    classify_parser.add_argument(
        "cards_file", nargs="?", help="Path to a JSON card file (built-in deck if omitted)"
    )
    classify_parser.add_argument("--verbose", "-v", action="store_true", help="Show every card")

    # Simulate command
    simulate_parser = subparsers.add_parser("simulate", help="Play an all-bot game")
    simulate_parser.add_argument("--bots", type=int, default=4, help="Number of bot players (2-6)")
    simulate_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    simulate_parser.add_argument("--max-steps", type=int, default=5000, help="Step limit")
    simulate_parser.add_argument("--quiet", "-q", action="store_true", help="Only print the result")

    args = parser.parse_args()
    setup_logging(args.log_level)

    if args.command == "board":
        cmd_board(args)
    elif args.command == "classify":
        cmd_classify(args)
    elif args.command == "simulate":
        cmd_simulate(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_board(args):
    """Print the board."""
    from .engine_core.board import DEFAULT_BOARD

    for space in DEFAULT_BOARD.spaces:
        print(f"{space.index:>3}  {space.name:<12} {space.effect_type.value:<13} {space.text}")


def cmd_classify(args):
    """Classify every card in a catalog and report unrecognized effects."""
    from .card_effects import CardCatalog, CardEffectClassifier
    from .errors import CatalogError
    from .games.shitz_creek import default_catalog

    if args.cards_file:
        try:
            catalog = CardCatalog.from_json_file(args.cards_file)
        except FileNotFoundError:
            print(f"Error: File not found: {args.cards_file}")
            sys.exit(1)
        except CatalogError as e:
            print(f"Error: {e}")
            sys.exit(1)
    else:
        catalog = default_catalog()

    classifier = CardEffectClassifier()
    report = classifier.classify_catalog(catalog)

    if args.verbose:
        for card in catalog:
            action = classifier.classify(card.effect_text)
            print(f"{card.id:<8} {action.kind.value:<28} {card.effect_text}")
        print()

    print(f"Cards: {report.total}")
    print(f"Recognized: {report.recognized} ({report.coverage:.0%})")
    print("\nBy kind:")
    for kind, count in sorted(report.by_kind.items()):
        print(f"  {kind}: {count}")

    if report.warnings:
        print("\nWarnings:")
        for w in report.warnings:
            print(f"  - {w}")


def cmd_simulate(args):
    """Play a full game between bots."""
    from .config import EngineConfig
    from .session import SessionManager, GameLoop, LoopState

    manager = SessionManager(config=EngineConfig.from_env())
    try:
        session = manager.create_session([], num_bots=args.bots, seed=args.seed)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    loop = GameLoop(session)
    result = loop.run_bot_turns(max_steps=args.max_steps)

    if not args.quiet:
        for message in session.message_log:
            print(message)
        print()

    state = session.game_state
    if result.loop_state == LoopState.GAME_OVER:
        winner = state.get_player(state.winner)
        print(f"Winner: {winner.name} after {state.turn_number} turns")
    else:
        print(f"No winner after {args.max_steps} steps (turn {state.turn_number})")

    for p in state.players:
        print(f"  {p.name:<20} space {p.position:>2}  paddles {p.paddles}")

    if not result.success:
        print(f"Error: {result.error}")
        sys.exit(1)


if __name__ == "__main__":
    main()
