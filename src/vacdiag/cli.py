"""vacdiag CLI — main entry point.

Commands:
  chat      Start interactive diagnostic chat (default)
  ask       Ask a single question and print the reply
  search    Show the knowledge entries most similar to a query
  serve     Run the HTTP engine
  config    View and update project settings
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="vacdiag",
        description="vacdiag — vacuum pump diagnostic assistant",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")

    # chat
    subparsers.add_parser("chat", help="Start interactive diagnostic chat")

    # ask
    ask_parser = subparsers.add_parser("ask", help="Ask a single question")
    ask_parser.add_argument("message", help="Symptom description or question")

    # search
    search_parser = subparsers.add_parser("search", help="Search the knowledge base")
    search_parser.add_argument("query", help="Free-text query")
    search_parser.add_argument("-k", "--top-k", type=int, default=2, help="Number of results")

    # serve
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP engine")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8742)

    # config
    config_parser = subparsers.add_parser("config", help="View and update project settings")
    config_parser.add_argument(
        "action", choices=["show", "get", "set"], help="Action to perform"
    )
    config_parser.add_argument("key", nargs="?", help="Setting key (for get/set)")
    config_parser.add_argument("value", nargs="?", help="Setting value (for set)")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        args.command = "chat"

    try:
        if args.command == "chat":
            return cmd_chat(args)
        elif args.command == "ask":
            return cmd_ask(args)
        elif args.command == "search":
            return cmd_search(args)
        elif args.command == "serve":
            return cmd_serve(args)
        elif args.command == "config":
            return cmd_config(args)
        else:
            parser.print_help()
            return 1
    except KeyboardInterrupt:
        print("\nInterrupted.")
        return 130
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def _build_assistant():
    from vacdiag.config import load_settings
    from vacdiag.core.assistant import create_assistant
    from vacdiag.utils.paths import find_project_root

    assistant = create_assistant(load_settings(find_project_root()))
    # Fail fast on a malformed corpus
    assistant.index_holder.initialize()
    return assistant


def cmd_chat(args: argparse.Namespace) -> int:
    """Start interactive chat session."""
    from vacdiag.chat.repl import run_repl

    run_repl(_build_assistant())
    return 0


def cmd_ask(args: argparse.Namespace) -> int:
    """Ask one question and render the reply."""
    from vacdiag.chat.renderer import ChatRenderer

    result = _build_assistant().ask(args.message)
    ChatRenderer().render_assistant_message(result.reply)
    return 1 if result.fallback else 0


def cmd_search(args: argparse.Namespace) -> int:
    """Print the top-k knowledge chunks with their scores."""
    from vacdiag.rag.retriever import retrieve_scored

    index = _build_assistant().index_holder.get()
    results = retrieve_scored(index, args.query, args.top_k)
    if not results:
        print("Knowledge base is empty.")
        return 0
    for r in results:
        print(f"[{r.score:.3f}]")
        print(r.text)
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Run the HTTP engine."""
    from vacdiag.engine.server import main as serve_main

    serve_main(["--host", args.host, "--port", str(args.port)])
    return 0


ALLOWED_CONFIG_KEYS = {
    "model", "base_url", "temperature", "max_tokens", "top_p", "timeout", "top_k", "corpus_path",
}
INT_KEYS = {"max_tokens", "top_k"}
FLOAT_KEYS = {"temperature", "top_p", "timeout"}


def cmd_config(args: argparse.Namespace) -> int:
    """View and update project settings."""
    from vacdiag.utils.paths import find_project_root, get_project_settings_path
    from vacdiag.config import (
        load_settings,
        save_settings,
        validate_settings,
    )

    project_root = find_project_root() or Path.cwd()
    action = args.action

    if action == "show":
        settings = load_settings(project_root)
        print(json.dumps(settings.to_dict(), indent=2))
        return 0

    if args.key and args.key not in ALLOWED_CONFIG_KEYS:
        print(
            f"Unknown key: {args.key}. "
            f"Allowed keys: {', '.join(sorted(ALLOWED_CONFIG_KEYS))}",
            file=sys.stderr,
        )
        return 1

    if action == "get":
        if not args.key:
            print("Usage: vacdiag config get <key>", file=sys.stderr)
            return 1
        settings = load_settings(project_root)
        value = getattr(settings, args.key)
        print(value if value is not None else "")
        return 0

    if action == "set":
        if not args.key or args.value is None:
            print("Usage: vacdiag config set <key> <value>", file=sys.stderr)
            return 1

        settings_path = get_project_settings_path(project_root)

        # Parse typed values
        value: str | int | float = args.value
        try:
            if args.key in INT_KEYS:
                value = int(args.value)
            elif args.key in FLOAT_KEYS:
                value = float(args.value)
        except ValueError:
            print(f"{args.key} must be a number", file=sys.stderr)
            return 1

        test_settings = load_settings(project_root)
        setattr(test_settings, args.key, value)
        errors = validate_settings(test_settings)
        if errors:
            for err in errors:
                print(f"Validation error: {err}", file=sys.stderr)
            return 1

        save_settings(test_settings, settings_path)
        print(f"{args.key} = {value}")
        return 0

    return 1


if __name__ == "__main__":
    sys.exit(main())
