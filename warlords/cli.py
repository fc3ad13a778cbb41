"""
Warlords CLI - Command-line tools for game configurations.

Usage:
    warlords init <dir>                        Write the classic config/state JSON
    warlords validate <config> [--state FILE]  Validate a config (and snapshot)
    warlords show [--config FILE] [--state FILE]  Print a board summary
    warlords check-rule <expr>                 Parse an edge rule
"""

import argparse
import sys
from pathlib import Path

from .config import configure_logging


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Warlords - rule-driven card game engine",
        prog="warlords",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default from env)")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    init_parser = subparsers.add_parser("init", help="Write the classic game files")
    init_parser.add_argument("directory", help="Output directory")

    validate_parser = subparsers.add_parser("validate", help="Validate a config file")
    validate_parser.add_argument("config_file", help="Path to config JSON")
    validate_parser.add_argument("--state", help="Path to state JSON")

    show_parser = subparsers.add_parser("show", help="Print a board summary")
    show_parser.add_argument("--config", help="Path to config JSON (default: classic)")
    show_parser.add_argument("--state", help="Path to state JSON (default: initial)")

    rule_parser = subparsers.add_parser("check-rule", help="Parse an edge rule")
    rule_parser.add_argument("expression", help="Rule expression")

    args = parser.parse_args(argv)
    configure_logging(args.log_level or None)

    if args.command == "init":
        return cmd_init(args)
    elif args.command == "validate":
        return cmd_validate(args)
    elif args.command == "show":
        return cmd_show(args)
    elif args.command == "check-rule":
        return cmd_check_rule(args)
    parser.print_help()
    return 1


def cmd_init(args) -> int:
    """Write config.json and state.json for the classic game."""
    from .game_config import save_config, save_state
    from .games.classic import setup_classic_game

    directory = Path(args.directory)
    directory.mkdir(parents=True, exist_ok=True)
    config, state = setup_classic_game()
    save_config(config, directory / "config.json")
    save_state(state, directory / "state.json")
    print(f"Wrote {directory / 'config.json'}")
    print(f"Wrote {directory / 'state.json'}")
    return 0


def cmd_validate(args) -> int:
    """Validate a configuration and optionally a snapshot against it."""
    from .game_config import (
        ConfigValidationError,
        StateValidationError,
        load_config,
        load_state,
    )

    print(f"Validating: {args.config_file}")
    try:
        config = load_config(args.config_file)
        print(f"Cards: {len(config.cards)}")
        print(f"Piles: {len(config.piles)}")
        if args.state:
            print(f"Validating: {args.state}")
            load_state(args.state, config)
    except FileNotFoundError as e:
        print(f"Error: File not found: {e.filename}")
        return 1
    except (ConfigValidationError, StateValidationError) as e:
        print(f"\n{e}")
        for error in e.errors:
            print(f"  - {error}")
        return 1

    print("OK")
    return 0


def cmd_show(args) -> int:
    """Print each tableau with its piles and card counts."""
    from .engine_core.queries import get_turn_player
    from .game_config import load_config, load_state
    from .games.classic import create_classic_config, create_initial_state

    config = load_config(args.config) if args.config else create_classic_config()
    state = load_state(args.state, config) if args.state else create_initial_state(config)

    print(f"Phase: {state.phase.value}")
    print(f"Turn: {get_turn_player(state)}")
    if state.ended:
        print(f"Winner: {state.winner}")
    for tableau_id, tableau in state.tableaux.items():
        print(f"\n{tableau_id}")
        for pile_id in tableau.piles:
            pile = state.piles[pile_id]
            top = pile.top_card or "-"
            acted = " (acted)" if pile.has_acted else ""
            print(f"  {pile_id:<18} {pile.count:>3} cards  top: {top}{acted}")
    return 0


def cmd_check_rule(args) -> int:
    """Parse a rule and print its syntax tree."""
    from .engine_core.expression import RuleSyntaxError, format_ast, parse_rule

    try:
        node = parse_rule(args.expression)
    except RuleSyntaxError as e:
        print(f"Error: {e}")
        return 1
    print(format_ast(node))
    return 0


if __name__ == "__main__":
    sys.exit(main())
