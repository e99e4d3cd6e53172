"""CLI for accelerator matching: python -m keymatch"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from keymatch._router import KNOWN_PLATFORMS, detect_platform, platform_probe
from keymatch.keymap import KeymapError, load_keymap
from keymatch.matcher import KeyEvent, key_match
from keymatch.pattern import InvalidPatternError, parse_pattern

EXIT_MATCH = 0
EXIT_NO_MATCH = 1
EXIT_ERROR = 2


def _add_platform_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--platform",
        type=str,
        default=None,
        choices=list(KNOWN_PLATFORMS),
        help="Force platform for CmdOrCtrl/Option (default: auto-detect)",
    )


def _add_event_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--key", type=str, required=True, help='Event key label (e.g. "Enter", " ", "ArrowUp")'
    )
    parser.add_argument("--ctrl", action="store_true", help="Ctrl held")
    parser.add_argument("--alt", action="store_true", help="Alt/Option held")
    parser.add_argument("--shift", action="store_true", help="Shift held")
    parser.add_argument("--meta", action="store_true", help="Meta/Cmd/Super held")
    _add_platform_arg(parser)


def _event_from_args(args: argparse.Namespace) -> KeyEvent:
    return KeyEvent(key=args.key, ctrl=args.ctrl, alt=args.alt, shift=args.shift, meta=args.meta)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="keymatch",
        description="keymatch: Parse accelerator patterns and test key events against them",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print diagnostics (debug logging to stderr)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_parse = sub.add_parser("parse", help="Show how a pattern resolves")
    p_parse.add_argument("pattern", help='Accelerator pattern (e.g. "CmdOrCtrl+Shift+S")')
    p_parse.add_argument("--json", action="store_true", help="Print the parsed pattern as JSON")
    _add_platform_arg(p_parse)

    p_match = sub.add_parser("match", help="Test one key event against a pattern")
    p_match.add_argument("pattern", help="Accelerator pattern")
    _add_event_args(p_match)

    p_keymap = sub.add_parser("keymap", help="List keymap commands a key event triggers")
    p_keymap.add_argument("file", help="Keymap JSON file")
    _add_event_args(p_keymap)

    return parser


def _format_pattern(pattern) -> str:
    held = [name for name in ("ctrl", "alt", "shift", "meta") if getattr(pattern, name)]
    mods = "+".join(held) if held else "(none)"
    keys = " | ".join(pattern.keys) if not pattern.is_inert else "(never matches)"
    return f"modifiers: {mods}\nkeys: {keys}"


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    probe = platform_probe(args.platform)
    if args.verbose:
        print(f"Platform: {args.platform or detect_platform()}", file=sys.stderr)

    try:
        if args.command == "parse":
            pattern = parse_pattern(args.pattern, is_apple=probe)
            if args.json:
                print(json.dumps(pattern.to_dict()))
            else:
                print(_format_pattern(pattern))
            return EXIT_MATCH

        event = _event_from_args(args)

        if args.command == "match":
            matched = key_match(event, args.pattern, is_apple=probe)
            print("match" if matched else "no match")
            return EXIT_MATCH if matched else EXIT_NO_MATCH

        # keymap
        keymap = load_keymap(args.file)
        commands = keymap.commands_for(event, is_apple=probe)
        for command in commands:
            print(command)
        return EXIT_MATCH if commands else EXIT_NO_MATCH
    except (InvalidPatternError, KeymapError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
