"""Randomised exponential backoff between reconnection attempts."""

from __future__ import annotations

import random
import time
from datetime import timedelta
from typing import Optional


class ExponentialBackoff:
    """Produces delays of 1, 2, 4, 8 and then 16 seconds, each with ±500 ms noise."""

    BASE_MULTIPLIER_MS = 1000
    MAX_EXPONENT = 4
    NOISE_MS = 500

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._curr_exp = 0
        self._rng = rng if rng is not None else random.Random(int(time.time()))

    def generate(self) -> timedelta:
        """Return the next delay to wait before reconnecting."""
        if self._curr_exp < self.MAX_EXPONENT:
            exponent = self._curr_exp
            self._curr_exp += 1
        else:
            exponent = self.MAX_EXPONENT
        base = 1 << exponent
        noise = self._rng.randint(-self.NOISE_MS, self.NOISE_MS)
        return timedelta(milliseconds=base * self.BASE_MULTIPLIER_MS + noise)