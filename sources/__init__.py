# sources/__init__.py
from typing import Iterable, Optional, Protocol

from affinity.models import WishlistStatus

from . import fixed
from . import random_source


class ScoreSource(Protocol):
    def next_score(self) -> float: ...


class StatusSource(Protocol):
    def next_status(self) -> WishlistStatus: ...


SCORE_SOURCES = {
    "random": random_source.RandomScoreSource,
    "fixed": fixed.FixedScoreSource,
}

STATUS_SOURCES = {
    "random": random_source.RandomStatusSource,
    "fixed": fixed.FixedStatusSource,
}


def build_score_source(
    name: str, seed: Optional[int] = None, values: Optional[Iterable] = None
) -> ScoreSource:
    return _build(SCORE_SOURCES, "score", name, seed, values)


def build_status_source(
    name: str, seed: Optional[int] = None, values: Optional[Iterable] = None
) -> StatusSource:
    return _build(STATUS_SOURCES, "status", name, seed, values)


def _build(registry, kind: str, name: str, seed, values):
    key = (name or "random").strip().lower()
    factory = registry.get(key)
    if factory is None:
        raise ValueError(f"No {kind} source registered as '{name}'.")
    if key == "fixed":
        return factory(values or [])
    return factory(seed)
