# sources/random_source.py
import random
from typing import Optional

from affinity.models import INITIAL_STATUSES, MAX_SCORE, MIN_SCORE, WishlistStatus


class RandomScoreSource:
    """
    Simulated affinity scores, uniform over [0, 10].
    Pass a seed to make a run reproducible.
    """

    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed)

    def next_score(self) -> float:
        return self._rng.uniform(MIN_SCORE, MAX_SCORE)


class RandomStatusSource:
    """Placeholder for a real inventory signal: picks one of the initial statuses."""

    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed)

    def next_status(self) -> WishlistStatus:
        return self._rng.choice(INITIAL_STATUSES)
