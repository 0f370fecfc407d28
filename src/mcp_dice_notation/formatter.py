from __future__ import annotations

from collections.abc import Sequence

from .models import DEFAULT_COMMAND, Outcome, ParsedCommand


def format_command(parsed: ParsedCommand | None, default_command: str = DEFAULT_COMMAND) -> str:
    """Rebuild canonical notation so that ``parse(format_command(p)) == p``."""

    if parsed is None:
        return default_command

    command = f"{parsed.times}d{parsed.faces}"

    if parsed.keep:
        command += f"(k{parsed.keep})"
    if parsed.highest:
        command += "-H"
    if parsed.lowest:
        command += "-L"
    if parsed.multiplier != 1:
        command += f"x{parsed.multiplier}"
    if parsed.modifier > 0:
        command += f"+{parsed.modifier}"
    elif parsed.modifier < 0:
        command += str(parsed.modifier)

    if parsed.repeat != 1:
        command = f"{parsed.repeat}x({command})"

    return command


def rolls_expression(rolls: Sequence[int]) -> str:
    return "[ " + " + ".join(str(r) for r in rolls) + " ]"


def outcome_parts(outcome: Outcome, parsed: ParsedCommand) -> list[str]:
    parts = [rolls_expression(outcome.rolls)]
    if parsed.multiplier > 1:
        parts.append(f"x {parsed.multiplier}")
    if parsed.modifier > 0:
        parts.append(f"+ {parsed.modifier}")
    elif parsed.modifier < 0:
        parts.append(f"- {abs(parsed.modifier)}")
    return parts


def render_expression(parts_per_outcome: Sequence[Sequence[str]], total: int) -> str:
    if not parts_per_outcome:
        return str(total)

    if len(parts_per_outcome) == 1:
        expr = " ".join(parts_per_outcome[0])
    else:
        expr = " + ".join("(" + " ".join(parts) + ")" for parts in parts_per_outcome)

    return f"{expr} = {total}"


def render_text(command: str, outcomes: Sequence[Outcome], parsed: ParsedCommand) -> str:
    total = sum(o.total for o in outcomes)
    parts = [outcome_parts(o, parsed) for o in outcomes]
    return f"The result of {command} is {render_expression(parts, total)}"


# Narration lines, one per computation step.


def roll_line(index: int, value: int) -> str:
    return f"Roll #{index}: {value}"


def keep_line(keep: int, times: int, kept: Sequence[int]) -> str:
    return f"Keeping {keep} of {times} rolls: " + ", ".join(str(r) for r in kept)


def select_line(which: str, value: int) -> str:
    return f"Selecting the {which} roll: {value}"


def sum_line(rolls: Sequence[int], total: int) -> str:
    return "Adding up all the rolls: " + " + ".join(str(r) for r in rolls) + f" = {total}"


def multiplier_line(total: int, multiplier: int) -> str:
    return f"Applying the multiplier: {total} x {multiplier} = {total * multiplier}"


def modifier_line(total: int, modifier: int) -> str:
    return f"Adding the modifier: {total} + {modifier} = {total + modifier}"


def outcome_total_line(index: int, total: int) -> str:
    return f"The total of outcome #{index} is {total}"


def grand_total_line(command: str, total: int) -> str:
    return f"The result of {command} is {total}"
