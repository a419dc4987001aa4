# sources/fixed.py
import itertools
from typing import Iterable, List

from affinity.models import WishlistStatus


class FixedScoreSource:
    """Replays the given scores in order, wrapping around when exhausted."""

    def __init__(self, scores: Iterable[float]):
        values: List[float] = [float(s) for s in scores]
        if not values:
            raise ValueError("FixedScoreSource needs at least one score.")
        self._it = itertools.cycle(values)

    def next_score(self) -> float:
        return next(self._it)


class FixedStatusSource:
    def __init__(self, statuses: Iterable[WishlistStatus | str]):
        values = [WishlistStatus(s) for s in statuses]
        if not values:
            raise ValueError("FixedStatusSource needs at least one status.")
        self._it = itertools.cycle(values)

    def next_status(self) -> WishlistStatus:
        return next(self._it)
