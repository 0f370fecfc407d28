from __future__ import annotations

import secrets
from collections.abc import Sequence
from typing import Any, Protocol

import structlog

from . import formatter
from .errors import DomainError
from .models import ExecutionResult, Outcome, ParsedCommand


log = structlog.get_logger()


class RandomSource(Protocol):
    """Anything shaped like ``random.Random``; injected so tests are reproducible."""

    def randint(self, a: int, b: int) -> int: ...

    def sample(self, population: Sequence[Any], k: int) -> list[Any]: ...


def default_rng() -> RandomSource:
    return secrets.SystemRandom()


def roll(faces: int, rng: RandomSource) -> int:
    """Roll one die, uniform over ``1..faces``."""

    if faces < 1:
        raise DomainError(faces)
    return rng.randint(1, faces)


def _evaluate_outcome(
    index: int, parsed: ParsedCommand, rng: RandomSource, verbose: list[str]
) -> Outcome:
    rolls: list[int] = []
    for n in range(parsed.times):
        rolled = roll(parsed.faces, rng)
        rolls.append(rolled)
        verbose.append(formatter.roll_line(n + 1, rolled))

    original: list[int] | None = None

    # Keep is a random subset of the rolls, not the highest N.
    if parsed.keep:
        original = rolls
        rolls = rng.sample(original, min(parsed.keep, len(original)))
        verbose.append(formatter.keep_line(parsed.keep, parsed.times, rolls))

    if rolls and parsed.highest:
        best = max(rolls)
        original = original or rolls
        rolls = [best]
        verbose.append(formatter.select_line("highest", best))
    elif rolls and parsed.lowest:
        worst = min(rolls)
        original = original or rolls
        rolls = [worst]
        verbose.append(formatter.select_line("lowest", worst))

    total = sum(rolls)
    if parsed.times > 1:
        verbose.append(formatter.sum_line(rolls, total))

    if parsed.multiplier > 1:
        verbose.append(formatter.multiplier_line(total, parsed.multiplier))
        total *= parsed.multiplier

    if parsed.modifier > 0:
        verbose.append(formatter.modifier_line(total, parsed.modifier))
    total += parsed.modifier

    verbose.append(formatter.outcome_total_line(index, total))

    return Outcome(
        rolls=tuple(rolls),
        total=total,
        original_rolls=None if original is None else tuple(original),
    )


def evaluate(
    parsed: ParsedCommand,
    rng: RandomSource | None = None,
    command: str | None = None,
) -> ExecutionResult:
    """Roll every outcome of ``parsed`` and render the result.

    ``command`` is the notation echoed in the text; it defaults to the
    canonical form of ``parsed``. Raises DomainError when faces < 1.
    """

    if parsed.faces < 1:
        raise DomainError(parsed.faces)

    rng = rng or default_rng()
    command = command if command is not None else formatter.format_command(parsed)

    log.debug("dice.evaluate.start", command=command, parsed=parsed.to_dict())

    verbose: list[str] = []
    outcomes = tuple(_evaluate_outcome(n + 1, parsed, rng, verbose) for n in range(parsed.repeat))

    grand_total = sum(o.total for o in outcomes)
    verbose.append(formatter.grand_total_line(command, grand_total))

    result = ExecutionResult(
        command=command,
        parsed=parsed,
        outcomes=outcomes,
        text=formatter.render_text(command, outcomes, parsed),
        verbose=tuple(verbose),
    )
    log.debug("dice.evaluate.result", command=command, total=grand_total, outcomes=len(outcomes))
    return result
