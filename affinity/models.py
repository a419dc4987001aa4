# affinity/models.py
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

MAX_BRANDS = 10
MIN_SCORE = 0.0
MAX_SCORE = 10.0

DEFAULT_PRICE_CATEGORY = "shirts"
DEFAULT_MEMBERSHIP_PROVIDER = "store"


class WishlistStatus(str, Enum):
    AVAILABLE = "available"
    OUT_OF_STOCK = "out-of-stock"
    DISCONTINUED = "discontinued"
    CLAIMED = "claimed"


# Statuses a freshly added item may start in; CLAIMED is only reachable by claiming.
INITIAL_STATUSES: Tuple[WishlistStatus, ...] = (
    WishlistStatus.AVAILABLE,
    WishlistStatus.OUT_OF_STOCK,
    WishlistStatus.DISCONTINUED,
)


class PrivacyLevel(str, Enum):
    BASIC = "Basic"
    STANDARD = "Standard"
    DETAILED = "Detailed"


class WishlistVisibility(str, Enum):
    NOBODY = "Nobody"
    FRIENDS = "Friends"


@dataclass(frozen=True)
class Brand:
    """
    A favorite brand. The affinity score only orders the top-10 list and
    is never part of a shared view.
    """
    name: str
    affinity_score: float


@dataclass(frozen=True)
class WishlistItem:
    sku: str
    status: WishlistStatus = WishlistStatus.AVAILABLE

    @property
    def claimed(self) -> bool:
        return self.status is WishlistStatus.CLAIMED


def _default_price_bands() -> Dict[str, str]:
    return {DEFAULT_PRICE_CATEGORY: ""}


def _default_membership_ids() -> Dict[str, str]:
    return {DEFAULT_MEMBERSHIP_PROVIDER: ""}


@dataclass(frozen=True)
class Card:
    """
    Immutable snapshot of a brand affinity card.
    Brands are kept sorted by affinity score (highest first); wishlist
    order is insertion order. The mappings are read-only copies, so only
    the store can change a card, by building a new one.
    """
    brands: Tuple[Brand, ...] = ()
    wishlist: Tuple[WishlistItem, ...] = ()
    price_bands: Mapping[str, str] = field(default_factory=_default_price_bands)
    membership_ids: Mapping[str, str] = field(default_factory=_default_membership_ids)

    def __post_init__(self):
        object.__setattr__(self, "price_bands", MappingProxyType(dict(self.price_bands)))
        object.__setattr__(self, "membership_ids", MappingProxyType(dict(self.membership_ids)))

    @property
    def store_membership_id(self) -> str:
        return self.membership_ids.get(DEFAULT_MEMBERSHIP_PROVIDER, "")


@dataclass(frozen=True)
class PrivacyConfig:
    privacy_level: PrivacyLevel = PrivacyLevel.BASIC
    wishlist_visibility: WishlistVisibility = WishlistVisibility.NOBODY
    show_price_bands: bool = False
    hide_all_prices: bool = False  # master override


@dataclass(frozen=True)
class SharedView:
    """
    What a viewer of the card is allowed to see.
    A field set to None is hidden by policy; as_dict() omits it entirely,
    so absence is the only signal for "hidden".
    """
    brands: Tuple[str, ...] = ()
    price_bands: Optional[Dict[str, str]] = None
    membership_id: Optional[str] = None
    wishlist: Optional[Tuple[str, ...]] = None

    def as_dict(self) -> Dict[str, object]:
        out: Dict[str, object] = {"brands": list(self.brands)}
        if self.price_bands is not None:
            out["priceBands"] = dict(self.price_bands)
        if self.membership_id is not None:
            out["membershipId"] = self.membership_id
        if self.wishlist is not None:
            out["wishlist"] = list(self.wishlist)
        return out
