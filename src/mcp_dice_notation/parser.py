from __future__ import annotations

import re

from .models import DEFAULT_COMMAND, ParsedCommand


# Repeat envelopes: "2x(4d6-L)" or "(4d6-L)x2". The suffix form must open with
# "(" so that "4d6(k2)x3" stays a keep clause followed by a multiplier.
_PREFIX_RE = re.compile(r"^(?P<repeat>\d+)x\((?P<body>.*)$", re.IGNORECASE | re.DOTALL)
_SUFFIX_RE = re.compile(r"^\((?P<body>.*)\)x(?P<repeat>\d+)$", re.IGNORECASE | re.DOTALL)

# Alternatives are tried in this order at every position of the body.
_TOKEN_RE = re.compile(
    r"(?P<dice>(?P<times>\d*)d(?P<faces>\d*))"
    r"|(?P<keep>\(k(?P<kept>\d+)\))"
    r"|(?P<select>-(?P<flag>[lh]))"
    r"|(?P<multiplier>x(?P<factor>\d+)(?![\dd]))"
    r"|(?P<modifier>(?P<sign>[+-])\s*(?P<amount>\d+)(?![\dd]))"
    r"|(?P<other>.)",
    re.IGNORECASE | re.DOTALL,
)


def _positive(digits: str | None) -> int | None:
    if not digits:
        return None
    value = int(digits)
    return value if value > 0 else None


def _split_repeat(text: str) -> tuple[str, int | None]:
    m = _PREFIX_RE.match(text)
    if m:
        body = m.group("body")
        # Closing paren of the envelope is optional.
        if body.endswith(")") and body.count(")") > body.count("("):
            body = body[:-1]
        return body, _positive(m.group("repeat"))

    m = _SUFFIX_RE.match(text)
    if m:
        return m.group("body"), _positive(m.group("repeat"))

    return text, None


def tokenize(body: str) -> list[tuple[str, re.Match[str]]]:
    """Classify the body left to right; unrecognized characters are dropped."""

    tokens: list[tuple[str, re.Match[str]]] = []
    for m in _TOKEN_RE.finditer(body):
        kind = m.lastgroup
        if kind is None or kind == "other":
            continue
        tokens.append((kind, m))
    return tokens


def parse(command: str | None, default_command: str = DEFAULT_COMMAND) -> ParsedCommand:
    """Parse dice notation into a fully populated ParsedCommand.

    Never raises. Blank input is replaced by ``default_command``; segments that
    are absent, zero or unrecognized take their defaults. For each field the
    first positive value wins, so ``2d6d8`` reads as ``2d6`` and the stray
    ``d`` in ``damage 2d8`` does not hide the dice.
    """

    if not command or not command.strip():
        command = default_command

    body, repeat = _split_repeat(command.strip())

    values: dict[str, int | None] = {}
    lowest = False
    highest = False

    for kind, m in tokenize(body):
        if kind == "dice":
            # times and faces lock independently, each on its first positive value.
            if not values.get("times"):
                values["times"] = _positive(m.group("times"))
            if not values.get("faces"):
                values["faces"] = _positive(m.group("faces"))
        elif kind == "keep":
            if not values.get("keep"):
                values["keep"] = _positive(m.group("kept"))
        elif kind == "select":
            if m.group("flag").lower() == "h":
                highest = True
            else:
                lowest = True
        elif kind == "multiplier":
            if not values.get("multiplier"):
                values["multiplier"] = _positive(m.group("factor"))
        elif kind == "modifier":
            if values.get("modifier"):
                continue
            amount = int(m.group("amount"))
            values["modifier"] = -amount if m.group("sign") == "-" else amount

    return ParsedCommand(
        times=values.get("times") or 1,
        faces=values.get("faces") or 20,
        keep=values.get("keep") or None,
        lowest=lowest,
        highest=highest,
        multiplier=values.get("multiplier") or 1,
        modifier=values.get("modifier") or 0,
        repeat=repeat or 1,
    )
