"""
Entry point and CLI for the document assistant.

Packages:
- docassist.docs: document model, selection adapter, txt/docx I/O
- docassist.llm: chat-completion client and prompt templates
- docassist.settings: per-user settings store
- docassist.commands: menu and command layer
"""

from __future__ import annotations

import argparse
import dataclasses
from typing import List, Optional

from docassist.commands import Assistant, ConsoleUi, build_menu, describe_settings
from docassist.config import get_user_properties_path, load_credentials
from docassist.docs import Document, DocumentError, load_document, save_document
from docassist.llm import CompletionClient
from docassist.logging_utils import DEFAULT_LOG_LEVEL, LOG_LEVEL_OPTIONS, configure_logging
from docassist.settings import (
    MalformedSettingsError,
    Settings,
    SettingsStore,
    SettingsValidationError,
    UserProperties,
)

__all__ = [
    "Assistant",
    "CompletionClient",
    "SettingsStore",
    "build_menu",
    "load_document",
    "save_document",
]

# CLI subcommand -> Assistant command
TEXT_COMMANDS = {
    "enhance": "enhance",
    "summarize": "summarize",
    "fix-grammar": "fix_grammar",
}


def _parse_range(value: str) -> tuple[int, int]:
    try:
        start, end = value.split(":", 1)
        return int(start), int(end)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected START:END character offsets, got '{value}'")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Send selected document text to a chat-completion model and insert the reply.")
    parser.add_argument("--log-level", type=str.upper, default=DEFAULT_LOG_LEVEL, choices=LOG_LEVEL_OPTIONS, help=f"Logging level (default: {DEFAULT_LOG_LEVEL})")
    parser.add_argument("--timeout", type=float, default=None, help="Request timeout in seconds (default: HTTP client default)")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("panel", help="Show the assistant panel")

    for name in TEXT_COMMANDS:
        p = sub.add_parser(name, help=f"Run '{name}' on the selected text of a document")
        p.add_argument("--file", "-f", type=str, required=True, help="Path to input document (txt|docx)")
        where = p.add_mutually_exclusive_group()
        where.add_argument("--select", "-s", type=_parse_range, help="Selection as START:END plain-text offsets (end exclusive)")
        where.add_argument("--cursor", "-c", type=int, help="Cursor offset (insertion point when nothing is selected)")
        p.add_argument("--out", "-o", type=str, default=None, help="Output path (default: overwrite input)")

    settings = sub.add_parser("settings", help="Show or change settings")
    settings_sub = settings.add_subparsers(dest="settings_command")
    settings_sub.add_parser("show", help="Show current settings (default)")
    settings_sub.add_parser("reset", help="Restore default settings")
    setp = settings_sub.add_parser("set", help="Change settings")
    setp.add_argument("--base-url", type=str, help="Chat-completions endpoint URL")
    setp.add_argument("--model", type=str, help="Model name")
    setp.add_argument("--temperature", type=float, help="Sampling temperature in [0, 1]")
    setp.add_argument("--max-tokens", type=int, help="Maximum tokens in the reply (>= 150)")

    sub.add_parser("test-connection", help="Send a test prompt to the configured endpoint")
    return parser


def _settings_command(args: argparse.Namespace, assistant: Assistant, store: SettingsStore) -> int:
    action = args.settings_command or "show"
    if action == "show":
        assistant.show_settings()
        return 0
    if action == "reset":
        store.reset()
        print("Settings restored to defaults.")
        return 0

    try:
        current = store.load()
    except MalformedSettingsError as e:
        print(f"Warning: stored settings ignored: {e}")
        current = Settings()
    changes = {
        "base_url": args.base_url,
        "model": args.model,
        "temperature": args.temperature,
        "max_tokens": args.max_tokens,
    }
    updated = dataclasses.replace(current, **{k: v for k, v in changes.items() if v is not None})
    try:
        store.save(updated)
    except SettingsValidationError as e:
        print(str(e))
        return 2
    print(describe_settings(updated))
    return 0


def _cli(argv: Optional[List[str]] = None) -> int:
    """CLI for the assistant commands.

    panel: show the assistant panel
    enhance | summarize | fix-grammar: transform the selected text of --file
      --select START:END  selected plain-text range (paragraphs joined by newlines)
      --cursor OFFSET     insertion point when nothing is selected
      --out PATH          write the result here instead of overwriting --file
    settings [show|set|reset]: manage per-user settings
    test-connection: round-trip a canned prompt
    """
    args = _build_parser().parse_args(argv)
    configure_logging(args.log_level)

    store = SettingsStore(UserProperties(get_user_properties_path()))
    client = CompletionClient(store, load_credentials(), timeout=args.timeout)
    ui = ConsoleUi()

    if args.command in TEXT_COMMANDS:
        try:
            doc = load_document(args.file)
            if args.select is not None:
                doc.select(*args.select)
            elif args.cursor is not None:
                doc.place_cursor(args.cursor)
        except (FileNotFoundError, DocumentError) as e:
            print(str(e))
            return 2
        assistant = Assistant(doc, ui, store, client)
        position = assistant.run(TEXT_COMMANDS[args.command])
        if position is None:
            return 1
        try:
            out_path = save_document(doc, args.out or args.file, src_path=args.file)
        except DocumentError as e:
            print(str(e))
            return 2
        print(f"Inserted {position.value}: {out_path}")
        return 0

    assistant = Assistant(Document(), ui, store, client)
    try:
        if args.command == "panel":
            assistant.run("show_sidebar")
            return 0
        if args.command == "settings":
            return _settings_command(args, assistant, store)
    except MalformedSettingsError as e:
        print(f"{e} (run 'settings reset' to restore defaults)")
        return 2
    if args.command == "test-connection":
        ok = client.test_connection()
        print("Connection successful" if ok else "Connection failed")
        return 0 if ok else 1
    return 2


if __name__ == "__main__":
    raise SystemExit(_cli())
