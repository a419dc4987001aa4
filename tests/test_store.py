"""Tests for affinity.store: mutation operations and their validation."""

import random

import pytest

from affinity.errors import AlreadyClaimed, CapacityExceeded, OutOfRange, ValidationError
from affinity.models import (
    MAX_BRANDS,
    Card,
    PrivacyLevel,
    WishlistStatus,
    WishlistVisibility,
)
from affinity.store import CardStore
from sources.fixed import FixedScoreSource, FixedStatusSource
from sources.random_source import RandomScoreSource


class TestAddBrand:
    def test_sorted_descending_after_every_add(self, store_factory) -> None:
        rng = random.Random(7)
        scores = [round(rng.uniform(0, 10), 3) for _ in range(MAX_BRANDS)]
        s = store_factory(scores=scores)
        for i in range(MAX_BRANDS):
            s.add_brand(f"brand-{i}")
            got = [b.affinity_score for b in s.card.brands]
            assert got == sorted(got, reverse=True)
            assert len(got) == i + 1

    def test_random_source_keeps_invariant(self) -> None:
        s = CardStore(score_source=RandomScoreSource(seed=42))
        for i in range(25):
            try:
                s.add_brand(f"b{i}")
            except CapacityExceeded:
                pass
            scores = [b.affinity_score for b in s.card.brands]
            assert len(scores) <= MAX_BRANDS
            assert scores == sorted(scores, reverse=True)
            assert all(0.0 <= x <= 10.0 for x in scores)

    def test_eleventh_brand_rejected_and_existing_unchanged(self, store_factory) -> None:
        s = store_factory(scores=range(MAX_BRANDS + 1))
        for i in range(MAX_BRANDS):
            s.add_brand(f"b{i}")
        before = s.card.brands

        with pytest.raises(CapacityExceeded):
            s.add_brand("one-too-many")

        assert s.card.brands == before
        assert "one-too-many" not in [b.name for b in s.card.brands]

    def test_ties_keep_insertion_order(self, store_factory) -> None:
        s = store_factory(scores=(5.0, 5.0, 7.0, 5.0))
        for name in ("first", "second", "top", "third"):
            s.add_brand(name)
        assert [b.name for b in s.card.brands] == ["top", "first", "second", "third"]

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_empty_name_rejected(self, store, name) -> None:
        with pytest.raises(ValidationError):
            store.add_brand(name)
        assert store.card.brands == ()

    def test_name_is_stripped(self, store) -> None:
        brand = store.add_brand("  Uniqlo ")
        assert brand.name == "Uniqlo"

    def test_out_of_range_score_source_is_refused(self, store_factory) -> None:
        s = store_factory(scores=(11.5,))
        with pytest.raises(ValueError, match="outside"):
            s.add_brand("A")
        assert s.card.brands == ()

    def test_snapshot_not_affected_by_later_adds(self, store) -> None:
        card_before, _ = store.snapshot()
        store.add_brand("A")
        assert card_before.brands == ()
        assert len(store.card.brands) == 1


class TestWishlist:
    def test_append_preserves_order_and_duplicates(self, store_factory) -> None:
        s = store_factory(statuses=("available", "discontinued", "out-of-stock"))
        for sku in ("X", "Y", "X"):
            s.add_wishlist_item(sku)
        assert [it.sku for it in s.card.wishlist] == ["X", "Y", "X"]
        assert [it.status for it in s.card.wishlist] == [
            WishlistStatus.AVAILABLE,
            WishlistStatus.DISCONTINUED,
            WishlistStatus.OUT_OF_STOCK,
        ]

    @pytest.mark.parametrize("sku", ["", " ", None])
    def test_empty_sku_rejected(self, store, sku) -> None:
        with pytest.raises(ValidationError):
            store.add_wishlist_item(sku)
        assert store.card.wishlist == ()

    def test_status_source_cannot_start_items_claimed(self) -> None:
        s = CardStore(
            score_source=FixedScoreSource([1.0]),
            status_source=FixedStatusSource(["claimed"]),
        )
        with pytest.raises(ValueError):
            s.add_wishlist_item("SKU")

    def test_claim_sets_claimed(self, store) -> None:
        store.add_wishlist_item("A")
        store.add_wishlist_item("B")
        item = store.claim_wishlist_item(1)
        assert item.status is WishlistStatus.CLAIMED
        assert store.card.wishlist[0].status is WishlistStatus.AVAILABLE
        assert store.card.wishlist[1].claimed

    def test_double_claim_raises_and_keeps_state(self, store) -> None:
        store.add_wishlist_item("A")
        store.claim_wishlist_item(0)
        before = store.snapshot()

        with pytest.raises(AlreadyClaimed):
            store.claim_wishlist_item(0)

        assert store.snapshot() == before

    @pytest.mark.parametrize("index", [-1, 1, 99, "0", 0.0, True])
    def test_claim_out_of_range(self, store, index) -> None:
        store.add_wishlist_item("A")
        with pytest.raises(OutOfRange):
            store.claim_wishlist_item(index)
        assert store.card.wishlist[0].status is WishlistStatus.AVAILABLE

    def test_claim_on_empty_wishlist(self, store) -> None:
        with pytest.raises(OutOfRange):
            store.claim_wishlist_item(0)


class TestFreeTextFields:
    def test_defaults(self, store) -> None:
        assert store.card.price_bands == {"shirts": ""}
        assert store.card.membership_ids == {"store": ""}

    def test_price_band_replace(self, store) -> None:
        store.set_price_band("shirts", "$50-150")
        store.set_price_band("shirts", "")
        store.set_price_band("shoes", "$80-200")
        assert store.card.price_bands == {"shirts": "", "shoes": "$80-200"}

    def test_membership_replace(self, store) -> None:
        store.set_membership_id("store", "123")
        assert store.card.store_membership_id == "123"

    def test_none_rejected(self, store) -> None:
        with pytest.raises(ValidationError):
            store.set_price_band("shirts", None)
        with pytest.raises(ValidationError):
            store.set_membership_id(None, "x")


class TestPrivacyConfig:
    def test_defaults(self, store) -> None:
        cfg = store.config
        assert cfg.privacy_level is PrivacyLevel.BASIC
        assert cfg.wishlist_visibility is WishlistVisibility.NOBODY
        assert cfg.show_price_bands is False
        assert cfg.hide_all_prices is False

    def test_level_accepts_enum_and_string(self, store) -> None:
        store.set_privacy_level(PrivacyLevel.DETAILED)
        assert store.config.privacy_level is PrivacyLevel.DETAILED
        store.set_privacy_level("Standard")
        assert store.config.privacy_level is PrivacyLevel.STANDARD

    def test_unknown_level_rejected(self, store) -> None:
        with pytest.raises(ValidationError, match="Basic, Standard, Detailed"):
            store.set_privacy_level("Secret")
        assert store.config.privacy_level is PrivacyLevel.BASIC

    def test_toggle_wishlist_visibility(self, store) -> None:
        assert store.toggle_wishlist_visibility() is WishlistVisibility.FRIENDS
        assert store.toggle_wishlist_visibility() is WishlistVisibility.NOBODY
        assert store.config.wishlist_visibility is WishlistVisibility.NOBODY

    def test_no_cross_field_validation(self, store) -> None:
        store.set_privacy_level("Detailed")
        store.set_hide_all_prices(True)
        store.set_show_price_bands(True)
        cfg = store.config
        assert cfg.privacy_level is PrivacyLevel.DETAILED
        assert cfg.hide_all_prices and cfg.show_price_bands


class TestSnapshotIsolation:
    def test_snapshot_mappings_are_read_only(self, store) -> None:
        card_before, _ = store.snapshot()
        with pytest.raises(TypeError):
            card_before.price_bands["shirts"] = "$1"
        with pytest.raises(TypeError):
            card_before.membership_ids["store"] = "0000"
        assert store.card.price_bands == {"shirts": ""}
        assert store.card.membership_ids == {"store": ""}

    def test_card_copies_caller_mappings(self) -> None:
        bands = {"shirts": "$50-150"}
        s = CardStore(
            score_source=FixedScoreSource([1.0]),
            card=Card(price_bands=bands),
        )
        bands["shirts"] = "$1"
        assert s.card.price_bands["shirts"] == "$50-150"

    def test_setters_leave_old_snapshot_alone(self, store) -> None:
        card_before, _ = store.snapshot()
        store.set_price_band("shirts", "$50-150")
        store.set_membership_id("store", "1234")
        assert card_before.price_bands == {"shirts": ""}
        assert card_before.membership_ids == {"store": ""}

    @pytest.mark.parametrize("value", [42, 1.5, ["SKU"]])
    def test_non_string_sku_rejected(self, store, value) -> None:
        with pytest.raises(ValidationError):
            store.add_wishlist_item(value)
        assert store.card.wishlist == ()
