from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any

import structlog
from structlog.contextvars import bound_contextvars

from .config import DEFAULT_OPTIONS, DiceOptions
from .evaluator import RandomSource, default_rng, evaluate
from .formatter import format_command
from .models import ExecutionResult, ParsedCommand, ThrottleLimits
from .parser import parse
from .throttle import throttle


log = structlog.get_logger()


def _now_utc_iso() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


def resolve_command(command: str | None, options: DiceOptions) -> str:
    if not command or not command.strip():
        return options.command or DEFAULT_OPTIONS.command
    return command


def execute(
    command: str | None = None,
    options: DiceOptions | None = None,
    rng: RandomSource | None = None,
) -> ExecutionResult:
    """Parse, throttle, then roll. Raises ThrottleExceeded before any die is rolled."""

    options = options or DEFAULT_OPTIONS
    command = resolve_command(command, options)

    parsed = parse(command, default_command=options.command)
    throttle(parsed, options.throttles)

    return evaluate(parsed, rng=rng, command=command)


class DiceRoller:
    """Holds one immutable set of options and an optional random source."""

    def __init__(self, options: DiceOptions | None = None, rng: RandomSource | None = None):
        self.options = options or DEFAULT_OPTIONS
        self._rng = rng

    def with_options(self, **overrides: Any) -> DiceRoller:
        return DiceRoller(self.options.merged(**overrides), rng=self._rng)

    def execute(self, command: str | None = None) -> ExecutionResult:
        return execute(command, options=self.options, rng=self._rng)

    def parse(self, command: str | None) -> ParsedCommand:
        return parse(command, default_command=self.options.command)

    def format(self, parsed: ParsedCommand | None = None) -> str:
        return format_command(parsed, default_command=self.options.command)

    def throttle(self, parsed: ParsedCommand, limits: ThrottleLimits | None = None) -> None:
        throttle(parsed, limits or self.options.throttles)


def roll_from_text(
    text: str | None,
    options: DiceOptions | None = None,
    rng: RandomSource | None = None,
) -> dict[str, Any]:
    """Execute a command and return the JSON-ready result with audit details."""

    request_id = uuid.uuid4().hex
    rng = rng or default_rng()

    with bound_contextvars(request_id=request_id):
        log.info("dice.roll.start", command=text)
        result = execute(text, options=options, rng=rng)
        log.info("dice.roll.result", command=result.command, total=result.total)

    payload = result.to_dict()
    payload.update(
        {
            "request_id": request_id,
            "timestamp": _now_utc_iso(),
            "rng": {"source": f"{type(rng).__module__}.{type(rng).__name__}"},
        }
    )
    return payload
