import pytest

from affinity.models import INITIAL_STATUSES, WishlistStatus
from sources import build_score_source, build_status_source
from sources.fixed import FixedScoreSource, FixedStatusSource
from sources.random_source import RandomScoreSource, RandomStatusSource


def test_fixed_sources_cycle() -> None:
    scores = FixedScoreSource([1, 2.5])
    assert [scores.next_score() for _ in range(3)] == [1.0, 2.5, 1.0]
    statuses = FixedStatusSource(["discontinued", WishlistStatus.AVAILABLE])
    assert [statuses.next_status() for _ in range(3)] == [
        WishlistStatus.DISCONTINUED,
        WishlistStatus.AVAILABLE,
        WishlistStatus.DISCONTINUED,
    ]


def test_fixed_sources_need_values() -> None:
    with pytest.raises(ValueError):
        FixedScoreSource([])
    with pytest.raises(ValueError):
        FixedStatusSource([])


def test_seeded_random_sources_are_reproducible() -> None:
    a, b = RandomScoreSource(seed=3), RandomScoreSource(seed=3)
    assert [a.next_score() for _ in range(5)] == [b.next_score() for _ in range(5)]
    s = RandomStatusSource(seed=3)
    assert all(s.next_status() in INITIAL_STATUSES for _ in range(50))


def test_registry_lookup() -> None:
    assert isinstance(build_score_source("random", seed=1), RandomScoreSource)
    assert isinstance(build_score_source("FIXED", values=[4.0]), FixedScoreSource)
    assert isinstance(build_status_source("fixed", values=["available"]), FixedStatusSource)
    with pytest.raises(ValueError, match="No score source"):
        build_score_source("oracle")
