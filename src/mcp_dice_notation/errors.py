from __future__ import annotations


class DiceError(ValueError):
    """User-facing errors (fail-fast, no roll performed)."""


class ThrottleExceeded(DiceError):
    """A parsed value is above the limit configured for its field."""

    def __init__(self, field: str, value: int, limit: int) -> None:
        self.field = field
        self.value = value
        self.limit = limit
        super().__init__(
            f"[THROTTLE_EXCEEDED] {field} ({value}) exceeds the limit of {limit} that has been imposed"
        )


class DomainError(DiceError):
    """A die cannot be rolled with the requested number of faces."""

    def __init__(self, faces: int) -> None:
        self.faces = faces
        super().__init__(f"[DOMAIN_ERROR] Cannot roll a die with {faces} faces. Faces must be at least 1.")
