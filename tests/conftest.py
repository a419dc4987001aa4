import pytest

from affinity.models import WishlistStatus
from affinity.store import CardStore
from sources.fixed import FixedScoreSource, FixedStatusSource


def make_store(scores=(5.0,), statuses=(WishlistStatus.AVAILABLE,)) -> CardStore:
    return CardStore(
        score_source=FixedScoreSource(scores),
        status_source=FixedStatusSource(statuses),
    )


@pytest.fixture
def store() -> CardStore:
    return make_store()


@pytest.fixture
def example_store() -> CardStore:
    """Card from the worked example: A (9.1), B (3.0), shirts $50-150."""
    s = make_store(scores=(9.1, 3.0))
    s.add_brand("A")
    s.add_brand("B")
    s.set_price_band("shirts", "$50-150")
    s.set_membership_id("store", "1234567890")
    s.set_privacy_level("Standard")
    s.set_show_price_bands(True)
    s.set_hide_all_prices(False)
    return s


@pytest.fixture
def store_factory():
    return make_store
