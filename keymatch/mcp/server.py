"""keymatch MCP Server: accelerator pattern tools for AI agents.

Exposes tools to check how a keyboard shortcut definition resolves and
whether a given key press would trigger it.
"""

from __future__ import annotations

import json

from mcp.server.fastmcp import FastMCP

from keymatch._router import detect_platform, platform_probe
from keymatch.matcher import KeyEvent, key_match
from keymatch.pattern import InvalidPatternError, parse_pattern

mcp = FastMCP(
    name="keymatch",
    instructions=(
        "keymatch checks keyboard accelerator patterns such as "
        "'CmdOrCtrl+Shift+S' or 'EnterOrSpace'.\n\n"
        "TOOLS:\n"
        "- parse_accelerator(pattern) -- resolved modifiers and accepted keys\n"
        "- match_accelerator(pattern, key, ...) -- does a key press match?\n\n"
        "Modifiers must match exactly: an extra held modifier is a mismatch. "
        "CmdOrCtrl is Cmd on macOS/iOS and Ctrl elsewhere; Option only "
        "counts as Alt on macOS/iOS. Pass platform='macos' or 'windows' to "
        "check another platform's behaviour."
    ),
)


@mcp.tool()
def parse_accelerator(pattern: str, platform: str | None = None) -> str:
    """Parse an accelerator pattern and report what it requires.

    Returns JSON with the four modifier flags (ctrl, alt, shift, meta), the
    list of accepted keys, and the platform used to resolve aliases.
    A blank pattern parses to keys [""] and never matches.

    Args:
        pattern: Accelerator pattern, e.g. "CmdOrCtrl+Shift+S".
        platform: Resolve aliases as on this platform
                  ('windows', 'macos', 'ios', 'linux'). Default: this machine.
    """
    try:
        parsed = parse_pattern(pattern, is_apple=platform_probe(platform))
    except InvalidPatternError as exc:
        return f"Error: {exc}"
    result = parsed.to_dict()
    result["platform"] = platform or detect_platform()
    return json.dumps(result)


@mcp.tool()
def match_accelerator(
    pattern: str,
    key: str,
    ctrl: bool = False,
    alt: bool = False,
    shift: bool = False,
    meta: bool = False,
    platform: str | None = None,
) -> str:
    """Check whether a key press matches an accelerator pattern.

    The key is a DOM-style key label ("a", "Enter", " ", "ArrowUp").

    Args:
        pattern: Accelerator pattern, e.g. "Ctrl+EnterOrSpace".
        key: Key label of the press.
        ctrl: Ctrl held.
        alt: Alt/Option held.
        shift: Shift held.
        meta: Meta/Cmd/Super held.
        platform: Resolve aliases as on this platform. Default: this machine.
    """
    event = KeyEvent(key=key, ctrl=ctrl, alt=alt, shift=shift, meta=meta)
    try:
        matched = key_match(event, pattern, is_apple=platform_probe(platform))
    except InvalidPatternError as exc:
        return f"Error: {exc}"
    return "match" if matched else "no match"


def main() -> None:
    mcp.run()


if __name__ == "__main__":
    main()
