# affinity/projector.py
"""
Visibility projection: turns a full card plus privacy settings into the
view a viewer is allowed to see.

Rules, in order:
  1. brands        always shown, names only, top 10
  2. price bands   Standard + show_price_bands + not hide_all_prices
  3. membership id masked under the rule-2 condition, full under Detailed
  4. wishlist      Friends only; discontinued / out-of-stock items relabelled

Anything whose rule does not fire is left as None (absent).
"""
from typing import Dict, Optional, Tuple

from .models import (
    MAX_BRANDS,
    Card,
    PrivacyConfig,
    PrivacyLevel,
    SharedView,
    WishlistItem,
    WishlistStatus,
    WishlistVisibility,
)

MASK_VISIBLE_CHARS = 4

DISCONTINUED_LABEL = "Formerly loved {sku}"
OUT_OF_STOCK_LABEL = "Similar to {sku}"


def mask_identifier(value: str) -> str:
    """Last four characters, or the whole id when it is shorter than that."""
    return value[-MASK_VISIBLE_CHARS:]


def price_bands_visible(config: PrivacyConfig) -> bool:
    # hide_all_prices wins at every privacy level
    return (
        config.privacy_level is PrivacyLevel.STANDARD
        and config.show_price_bands
        and not config.hide_all_prices
    )


def _visible_brands(card: Card) -> Tuple[str, ...]:
    return tuple(b.name for b in card.brands[:MAX_BRANDS])


def _visible_price_bands(card: Card, config: PrivacyConfig) -> Optional[Dict[str, str]]:
    if not price_bands_visible(config):
        return None
    return dict(card.price_bands)


def _visible_membership_id(card: Card, config: PrivacyConfig) -> Optional[str]:
    if config.privacy_level is PrivacyLevel.DETAILED:
        return card.store_membership_id
    if price_bands_visible(config):
        return mask_identifier(card.store_membership_id)
    return None


def wishlist_label(item: WishlistItem) -> str:
    if item.status is WishlistStatus.DISCONTINUED:
        return DISCONTINUED_LABEL.format(sku=item.sku)
    if item.status is WishlistStatus.OUT_OF_STOCK:
        return OUT_OF_STOCK_LABEL.format(sku=item.sku)
    return item.sku


def _visible_wishlist(card: Card, config: PrivacyConfig) -> Optional[Tuple[str, ...]]:
    if config.wishlist_visibility is not WishlistVisibility.FRIENDS:
        return None
    return tuple(wishlist_label(it) for it in card.wishlist)


def project(card: Card, config: PrivacyConfig) -> SharedView:
    return SharedView(
        brands=_visible_brands(card),
        price_bands=_visible_price_bands(card, config),
        membership_id=_visible_membership_id(card, config),
        wishlist=_visible_wishlist(card, config),
    )
