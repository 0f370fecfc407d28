from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from .config import DEFAULT_OPTIONS, DiceOptions, load_settings
from .dice import roll_from_text
from .errors import DiceError
from .formatter import format_command
from .logging import setup_logging
from .parser import parse


mcp = FastMCP("mcp-dice-notation")

_options: DiceOptions = DEFAULT_OPTIONS


@mcp.tool()
def roll_dice(command: str = ""):
    """Roll dice from a notation string such as '3d6+2', '4d6(k3)' or '2x(4d6-L)'.

    Input: command (string); blank uses the configured default command
    Output: structured JSON with outcomes, text, step-by-step verbose log and audit details

    Raises a hard error (exception) when a value exceeds its configured limit.
    """

    try:
        return roll_from_text(command, options=_options)
    except DiceError as e:
        # Fail-fast: surface stable error codes in the message.
        raise ValueError(str(e)) from None


@mcp.tool()
def parse_notation(command: str):
    """Parse a notation string without rolling and return its canonical form."""

    parsed = parse(command, default_command=_options.command)
    return {
        "input": command,
        "parsed": parsed.to_dict(),
        "normalized_expression": format_command(parsed),
    }


def run() -> None:
    global _options

    settings = load_settings()
    setup_logging(settings)
    _options = settings.to_options()

    # Default transport is stdio.
    mcp.run()


if __name__ == "__main__":
    run()
