from __future__ import annotations

import structlog

from .errors import ThrottleExceeded
from .models import ParsedCommand, ThrottleLimits


log = structlog.get_logger()


def throttle(parsed: ParsedCommand, limits: ThrottleLimits) -> None:
    """Reject values above their configured limit before anything is rolled.

    Fields are checked in a fixed order (times, faces, modifier, multiplier,
    repeat). Default values count: a times limit of 0 rejects a plain ``d20``.
    """

    for name, limit in limits.items():
        if limit is None:
            continue
        value = getattr(parsed, name)
        if value > limit:
            log.warning("dice.throttle.rejected", field=name, value=value, limit=limit)
            raise ThrottleExceeded(name, value, limit)
