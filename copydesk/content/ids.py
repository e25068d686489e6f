"""Block identifier generation.

IDs look like ``par-lx3k2f-9a0b``: a three letter type prefix, a monotonic counter
in base36 and a short random suffix. The counter guarantees uniqueness within one
generator; the suffix only keeps IDs from separate generators apart with high
probability. Seed both (``start`` and ``rng``) to get reproducible IDs.
"""

import random
import time

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def to_base36(value: int) -> str:
    if value < 0:
        raise ValueError(f"Cannot encode negative value {value} in base36")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


class BlockIdGenerator:
    """Produces unique block IDs from an explicit counter and random source."""

    def __init__(
        self,
        start: int | None = None,
        rng: random.Random | None = None,
        suffix_length: int = 4,
    ):
        # Default start is the current time in ms so that IDs minted by different generators sort roughly by creation
        self._counter = start if start is not None else time.time_ns() // 1_000_000
        self._rng = rng or random.Random()
        self._suffix_length = suffix_length

    def next_id(self, block_type: str) -> str:
        prefix = block_type[:3]
        counter = to_base36(self._counter)
        self._counter += 1
        suffix = "".join(self._rng.choice(_BASE36) for _ in range(self._suffix_length))
        return f"{prefix}-{counter}-{suffix}"


# Shared by the block constructors and parse() when no generator is passed in
default_generator = BlockIdGenerator()
