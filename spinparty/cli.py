"""
Spin Party CLI - Command-line interface for the engine.

Usage:
    spinparty decks                                  List built-in decks
    spinparty play --players A B C [--rounds N]      Play a scripted session
    spinparty serve [--host H] [--port P]            Run the REST API
"""

import argparse
import logging
import random
import sys


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Spin Party - party game session engine",
        prog="spinparty",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Decks command
    decks_parser = subparsers.add_parser("decks", help="List built-in decks")
    decks_parser.add_argument("--questions", action="store_true", help="Also print every question")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a scripted session")
    play_parser.add_argument("--players", nargs="+", required=True, help="Player names")
    play_parser.add_argument("--deck", default="Truth or Dare", help="Built-in deck name")
    play_parser.add_argument("--rounds", type=int, default=5, help="Number of turns to play")
    play_parser.add_argument("--seed", type=int, default=None, help="Random seed for the wheel")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the REST API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.command == "decks":
        return cmd_decks(args)
    elif args.command == "play":
        return cmd_play(args)
    elif args.command == "serve":
        return cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_decks(args):
    """List built-in decks."""
    from .content import default_decks

    for deck in default_decks():
        print(f"{deck.name} ({deck.question_count} questions)")
        print(f"  {deck.description}")
        if args.questions:
            for q in deck.questions:
                print(f"  - [{q.difficulty.display_name}] {q.text}")
    return 0


def cmd_play(args):
    """Play a scripted session: spin, ask, advance."""
    from .content import default_decks
    from .engine_core import Transition
    from .session import SessionManager

    decks = {d.name.lower(): d for d in default_decks()}
    deck = decks.get(args.deck.strip().lower())
    if deck is None:
        print(f"Error: Unknown deck: {args.deck}")
        print("Available: " + ", ".join(d.name for d in decks.values()))
        sys.exit(1)

    rng = random.Random(args.seed)
    manager = SessionManager()
    session = manager.create_session(deck=deck, player_names=args.players)

    result = manager.apply(session.session_id, Transition.start())
    if not result.applied:
        print("Error: Game cannot start (need at least 2 players and a non-empty deck)")
        sys.exit(1)

    print(f"Session {session.session_id} on '{deck.name}'")
    for turn in range(1, args.rounds + 1):
        player = rng.choice(session.state.players)
        manager.apply(session.session_id, Transition.select_player(player))
        draw = manager.draw_question(session.session_id, rng=rng)
        if draw.reshuffled:
            print("-- deck exhausted, reshuffling --")
        print(f"Turn {turn}: {player.sanitized_name()} -> {draw.question.sanitized_text()}")
        manager.apply(session.session_id, Transition.advance_turn())

    state = session.state
    print(f"Used {state.questions_used_percentage():.0%} of the deck")
    manager.end_session(session.session_id)
    return 0


def cmd_serve(args):
    """Run the REST API with uvicorn."""
    try:
        import uvicorn
    except ImportError:
        print("Error: uvicorn not installed. Install with: pip install uvicorn")
        sys.exit(1)

    from .api import create_app

    uvicorn.run(create_app(), host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    main()
