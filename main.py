#!/usr/bin/env python3
"""
Eliza Engine - Main Entry Point
===============================

Command-line interface for talking to the local scripted responder and
for checking rule scripts.

Usage:
    python main.py                         # Interactive conversation
    python main.py --test "I am sad" "Why"  # One response per message
    python main.py --validate script.yaml   # Check a rule script
    python main.py --export-script out.yaml # Write the built-in script
"""

import sys
import argparse
from pathlib import Path
from typing import List, Optional

import yaml

from core.config import load_config, Config
from core.logging import setup_logging, get_logger
from core.exceptions import ElizaError
from rules.default_script import DEFAULT_SCRIPT
from rules.engine import ElizaEngine
from rules.script import load_script_file

logger = get_logger("main")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Eliza Engine - local scripted conversation partner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py                          Start a conversation
  python main.py --script my.yaml         Converse using a custom script
  python main.py --test "Hello" "I am sad" Print one response per message
  python main.py --validate my.yaml       Check a script for errors
        """
    )

    mode_group = parser.add_mutually_exclusive_group()
    mode_group.add_argument(
        "--chat",
        action="store_true",
        help="Start an interactive conversation (default)"
    )
    mode_group.add_argument(
        "--test",
        nargs="+",
        metavar="MESSAGE",
        help="Answer each MESSAGE in turn within one session"
    )
    mode_group.add_argument(
        "--validate",
        type=str,
        metavar="PATH",
        help="Load a script file and report problems"
    )
    mode_group.add_argument(
        "--export-script",
        type=str,
        metavar="PATH",
        help="Write the built-in script as YAML"
    )

    parser.add_argument(
        "--config",
        type=str,
        metavar="PATH",
        help="Path to configuration file"
    )
    parser.add_argument(
        "--script",
        type=str,
        metavar="PATH",
        help="Rule script to use instead of the configured one"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    return parser.parse_args(argv)


def run_chat(engine: ElizaEngine) -> None:
    """Run an interactive conversation on the console."""
    session = engine.create_session()
    print(f"{engine.name}: {engine.greeting(session)}")

    while not session.finished:
        try:
            text = input("> ")
        except EOFError:
            print()
            break
        print(f"{engine.name}: {engine.respond(text, session)}")

    logger.info(f"Conversation ended after {session.turns} turns", extra={"session": session.session_id})


def run_test_messages(engine: ElizaEngine, messages: List[str]) -> None:
    """Answer a fixed list of messages, one session for all of them."""
    session = engine.create_session()
    for message in messages:
        print(f"> {message}")
        print(f"{engine.name}: {engine.respond(message, session)}")


def run_validate(path: str) -> None:
    """Load a script file; errors propagate as ScriptError."""
    script = load_script_file(path)
    print(
        f"{path}: OK ({len(script.rules)} rules, {len(script.synonyms)} synonym groups, "
        f"{len(script.fallbacks)} fallbacks)"
    )


def export_script(path: str) -> None:
    """Write the built-in script to a YAML file."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    with open(target, "w", encoding="utf-8") as f:
        yaml.safe_dump(DEFAULT_SCRIPT, f, default_flow_style=False, sort_keys=False)
    print(f"Built-in script written to {target}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    try:
        config: Config = load_config(args.config)

        if args.script:
            config.engine.script_path = args.script
            config.engine.validate()
        if args.debug:
            config.logging.level = "DEBUG"

        setup_logging(
            log_dir=config.logging.log_dir or None,
            log_level=config.logging.level,
            json_format=config.logging.json_format,
            console_output=config.logging.console_output,
        )

        if args.validate:
            run_validate(args.validate)
        elif args.export_script:
            export_script(args.export_script)
        else:
            engine = ElizaEngine.from_config(config)
            if args.test:
                run_test_messages(engine, args.test)
            else:
                run_chat(engine)

        return 0

    except ElizaError as e:
        print(f"\nError: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted")
        return 0


if __name__ == "__main__":
    sys.exit(main())
