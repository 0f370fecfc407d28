from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any


DEFAULT_COMMAND = "d20"

# Checked in this order so the reported field is stable.
THROTTLED_FIELDS: tuple[str, ...] = ("times", "faces", "modifier", "multiplier", "repeat")


@dataclass(frozen=True)
class ParsedCommand:
    times: int = 1
    faces: int = 20
    keep: int | None = None
    lowest: bool = False
    highest: bool = False
    multiplier: int = 1
    modifier: int = 0
    repeat: int = 1

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Outcome:
    rolls: tuple[int, ...]
    total: int
    original_rolls: tuple[int, ...] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "rolls": list(self.rolls),
            "original_rolls": None if self.original_rolls is None else list(self.original_rolls),
            "total": self.total,
        }


@dataclass(frozen=True)
class ExecutionResult:
    command: str
    parsed: ParsedCommand
    outcomes: tuple[Outcome, ...]
    text: str
    verbose: tuple[str, ...] = field(default_factory=tuple)

    @property
    def total(self) -> int:
        return sum(o.total for o in self.outcomes)

    def to_dict(self) -> dict[str, Any]:
        """Stable JSON-ready shape shared with callers that serialize results."""

        return {
            "command": self.command,
            "parsed": self.parsed.to_dict(),
            "outcomes": [o.to_dict() for o in self.outcomes],
            "text": self.text,
            "verbose": list(self.verbose),
            "total": self.total,
        }


@dataclass(frozen=True)
class ThrottleLimits:
    """Per-field upper bounds. ``None`` leaves a field unchecked."""

    times: int | None = None
    faces: int | None = None
    modifier: int | None = None
    multiplier: int | None = None
    repeat: int | None = None

    def items(self) -> list[tuple[str, int | None]]:
        return [(name, getattr(self, name)) for name in THROTTLED_FIELDS]
