# affinity/metrics.py
import datetime
from dataclasses import dataclass
from typing import Optional

import pytz

from .logger import get_logger

logger = get_logger(__name__)

# Mock deltas applied on every simulated share (percentage points)
UPSELL_STEP = 35
IRRELEVANT_PITCH_STEP = 50
WISHLIST_CONVERSION_STEP = 60


def now_utc_iso() -> str:
    return datetime.datetime.now(tz=pytz.UTC).isoformat()


@dataclass
class ShareMetrics:
    """
    Mock success metrics shown next to the card preview.
    Nothing here feeds back into the card or its shared view.
    """
    upsell_rate: int = 0
    irrelevant_pitches: int = 0
    wishlist_conversion: int = 0
    shares: int = 0
    last_shared_at: Optional[str] = None

    def simulate_share(self) -> None:
        self.upsell_rate += UPSELL_STEP
        self.irrelevant_pitches = max(0, self.irrelevant_pitches - IRRELEVANT_PITCH_STEP)
        self.wishlist_conversion += WISHLIST_CONVERSION_STEP
        self.shares += 1
        self.last_shared_at = now_utc_iso()
        logger.info(
            "Shared! upsell=%d%% irrelevant_pitches=%d%% wishlist_conversion=%d%%",
            self.upsell_rate, self.irrelevant_pitches, self.wishlist_conversion,
        )
