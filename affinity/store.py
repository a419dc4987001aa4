# affinity/store.py
import dataclasses
from typing import Optional, Tuple

from sources import ScoreSource, StatusSource
from sources.random_source import RandomScoreSource, RandomStatusSource

from .errors import AlreadyClaimed, CapacityExceeded, OutOfRange, ValidationError
from .logger import get_logger
from .models import (
    INITIAL_STATUSES,
    MAX_BRANDS,
    MAX_SCORE,
    MIN_SCORE,
    Brand,
    Card,
    PrivacyConfig,
    PrivacyLevel,
    SharedView,
    WishlistItem,
    WishlistStatus,
    WishlistVisibility,
)
from .projector import project

logger = get_logger(__name__)


class CardStore:
    """
    Owns the card and its privacy configuration.

    Every operation swaps in a new immutable Card / PrivacyConfig, so a
    snapshot handed out earlier never changes underneath its holder.
    Visibility is never computed here; see affinity.projector.
    """

    def __init__(
        self,
        score_source: Optional[ScoreSource] = None,
        status_source: Optional[StatusSource] = None,
        card: Optional[Card] = None,
        config: Optional[PrivacyConfig] = None,
    ):
        self._scores = score_source or RandomScoreSource()
        self._statuses = status_source or RandomStatusSource()
        self._card = card or Card()
        self._config = config or PrivacyConfig()

    @property
    def card(self) -> Card:
        return self._card

    @property
    def config(self) -> PrivacyConfig:
        return self._config

    def snapshot(self) -> Tuple[Card, PrivacyConfig]:
        return self._card, self._config

    def project(self) -> SharedView:
        return project(self._card, self._config)

    # --- brands -----------------------------------------------------------

    def add_brand(self, name: str) -> Brand:
        name = _require_text(name, "Brand name")
        if len(self._card.brands) >= MAX_BRANDS:
            logger.warning("Rejected brand '%s': already at %d brands.", name, MAX_BRANDS)
            raise CapacityExceeded(f"Only top {MAX_BRANDS} brands allowed.")

        score = float(self._scores.next_score())
        if not MIN_SCORE <= score <= MAX_SCORE:
            raise ValueError(
                f"Score source produced {score!r}, outside [{MIN_SCORE}, {MAX_SCORE}]."
            )

        brand = Brand(name=name, affinity_score=score)
        # sorted() is stable, so equal scores keep insertion order
        brands = sorted(
            self._card.brands + (brand,),
            key=lambda b: b.affinity_score,
            reverse=True,
        )
        self._card = dataclasses.replace(self._card, brands=tuple(brands))
        logger.debug("Added brand %s (score %.2f); %d brands.", name, score, len(brands))
        return brand

    # --- wishlist ---------------------------------------------------------

    def add_wishlist_item(self, sku: str) -> WishlistItem:
        sku = _require_text(sku, "SKU")
        status = WishlistStatus(self._statuses.next_status())
        if status not in INITIAL_STATUSES:
            raise ValueError(f"Status source produced non-initial status {status.value!r}.")

        item = WishlistItem(sku=sku, status=status)
        self._card = dataclasses.replace(self._card, wishlist=self._card.wishlist + (item,))
        logger.debug("Added wishlist item %s (%s).", sku, status.value)
        return item

    def claim_wishlist_item(self, index: int) -> WishlistItem:
        """
        Mark the item at `index` as claimed for gifting.
        Negative indices are out of range. Claiming twice raises
        AlreadyClaimed and leaves the item untouched.
        """
        wishlist = self._card.wishlist
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(wishlist):
            logger.warning("Claim rejected: index %r out of range (%d items).", index, len(wishlist))
            raise OutOfRange(f"No wishlist item at index {index!r}.")

        item = wishlist[index]
        if item.claimed:
            logger.warning("Claim rejected: %s is already claimed.", item.sku)
            raise AlreadyClaimed(f"Wishlist item {item.sku!r} is already claimed.")

        claimed = dataclasses.replace(item, status=WishlistStatus.CLAIMED)
        updated = wishlist[:index] + (claimed,) + wishlist[index + 1:]
        self._card = dataclasses.replace(self._card, wishlist=updated)
        logger.debug("Claimed wishlist item %s at index %d.", item.sku, index)
        return claimed

    # --- free-text fields -------------------------------------------------

    def set_price_band(self, category: str, text: str) -> None:
        _require_not_none(category, "Price band category")
        _require_not_none(text, "Price band")
        bands = dict(self._card.price_bands)
        bands[category] = text
        self._card = dataclasses.replace(self._card, price_bands=bands)

    def set_membership_id(self, provider: str, value: str) -> None:
        _require_not_none(provider, "Membership provider")
        _require_not_none(value, "Membership id")
        ids = dict(self._card.membership_ids)
        ids[provider] = value
        self._card = dataclasses.replace(self._card, membership_ids=ids)

    # --- privacy configuration --------------------------------------------

    def set_privacy_level(self, level: PrivacyLevel | str) -> None:
        level = _coerce(PrivacyLevel, level, "privacy level")
        self._config = dataclasses.replace(self._config, privacy_level=level)
        logger.debug("Privacy level set to %s.", level.value)

    def set_wishlist_visibility(self, visibility: WishlistVisibility | str) -> None:
        visibility = _coerce(WishlistVisibility, visibility, "wishlist visibility")
        self._config = dataclasses.replace(self._config, wishlist_visibility=visibility)

    def toggle_wishlist_visibility(self) -> WishlistVisibility:
        if self._config.wishlist_visibility is WishlistVisibility.NOBODY:
            visibility = WishlistVisibility.FRIENDS
        else:
            visibility = WishlistVisibility.NOBODY
        self._config = dataclasses.replace(self._config, wishlist_visibility=visibility)
        return visibility

    def set_show_price_bands(self, value: bool) -> None:
        self._config = dataclasses.replace(self._config, show_price_bands=bool(value))

    def set_hide_all_prices(self, value: bool) -> None:
        self._config = dataclasses.replace(self._config, hide_all_prices=bool(value))


def _require_text(value: str, label: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{label} must be a non-empty string.")
    return value.strip()


def _require_not_none(value, label: str) -> None:
    if value is None:
        raise ValidationError(f"{label} must not be None.")


def _coerce(enum_cls, value, label: str):
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"Unknown {label} {value!r}; expected one of: {allowed}.")
