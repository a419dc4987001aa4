import os
import json
from typing import Any, Dict, List, Optional, Tuple

from affinity.errors import CardError, ValidationError
from affinity.logger import get_logger
from affinity.metrics import ShareMetrics
from affinity.models import INITIAL_STATUSES, MAX_SCORE, MIN_SCORE
from affinity.report import build_html_preview, build_plaintext_card, build_plaintext_preview
from affinity.store import CardStore
from sources import build_score_source, build_status_source

logger = get_logger(__name__)

CONFIG_PATH = os.getenv("CONFIG_PATH", "card.json")
PREVIEW_FORMAT = os.getenv("PREVIEW_FORMAT", "text").lower()  # "text" or "html"
SCORE_SOURCE = os.getenv("SCORE_SOURCE", "random")
STATUS_SOURCE = os.getenv("STATUS_SOURCE", "random")
_SEED_RAW = os.getenv("SOURCE_SEED", "").strip()


def _source_seed() -> Optional[int]:
    if not _SEED_RAW:
        return None
    try:
        return int(_SEED_RAW)
    except ValueError:
        logger.warning("Ignoring non-integer SOURCE_SEED=%r.", _SEED_RAW)
        return None


def load_config(path: str = CONFIG_PATH) -> Dict[str, Any]:
    if not os.path.exists(path):
        logger.error("Card file not found at %s", path)
        raise SystemExit(1)
    try:
        with open(path, "r", encoding="utf-8") as f:
            cfg = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error("Failed to load card file at %s: %s", path, e)
        raise SystemExit(1)

    if not isinstance(cfg, dict):
        logger.error("Card file must contain a JSON object.")
        raise SystemExit(1)

    for key in ("brands", "wishlist", "scores", "statuses"):
        if key in cfg and not isinstance(cfg[key], list):
            logger.error("Card file '%s' must be a list.", key)
            raise SystemExit(1)
    for key in ("price_bands", "membership_ids", "privacy"):
        if key in cfg and not isinstance(cfg[key], dict):
            logger.error("Card file '%s' must be an object.", key)
            raise SystemExit(1)

    for score in cfg.get("scores", []):
        if isinstance(score, bool) or not isinstance(score, (int, float)) or not MIN_SCORE <= score <= MAX_SCORE:
            logger.error("Card file 'scores' must be numbers in [%s, %s]; got %r.", MIN_SCORE, MAX_SCORE, score)
            raise SystemExit(1)

    initial = [s.value for s in INITIAL_STATUSES]
    for status in cfg.get("statuses", []):
        if status not in initial:
            logger.error("Card file 'statuses' must be one of %s; got %r.", initial, status)
            raise SystemExit(1)

    return cfg


def build_store(cfg: Dict[str, Any]) -> CardStore:
    seed = _source_seed()
    score_name = "fixed" if cfg.get("scores") else SCORE_SOURCE
    status_name = "fixed" if cfg.get("statuses") else STATUS_SOURCE
    return CardStore(
        score_source=build_score_source(score_name, seed=seed, values=cfg.get("scores")),
        status_source=build_status_source(status_name, seed=seed, values=cfg.get("statuses")),
    )


def _wishlist_entry(entry: Any) -> Tuple[Any, bool]:
    if isinstance(entry, dict):
        return entry.get("sku"), entry.get("claim", False) is True
    return entry, False


def _set_text_fields(setter, label: str, values: Dict[str, Any], errors: List[CardError]) -> None:
    for key, value in values.items():
        try:
            if not isinstance(value, str):
                raise ValidationError(f"{label} {key!r} must be a string, got {value!r}.")
            setter(key, value)
        except CardError as e:
            logger.error("%s %r rejected: %s", label, key, e)
            errors.append(e)


def apply_config(store: CardStore, cfg: Dict[str, Any]) -> List[CardError]:
    """
    Replay the card file through the store's operations.
    Rejected operations are logged and collected; the rest still apply.
    """
    errors: List[CardError] = []

    for name in cfg.get("brands", []):
        try:
            store.add_brand(name)
        except CardError as e:
            logger.error("Brand %r rejected: %s", name, e)
            errors.append(e)

    to_claim: List[int] = []
    for entry in cfg.get("wishlist", []):
        sku, claim = _wishlist_entry(entry)
        try:
            store.add_wishlist_item(sku)
        except CardError as e:
            logger.error("Wishlist item %r rejected: %s", sku, e)
            errors.append(e)
            continue
        if claim:
            to_claim.append(len(store.card.wishlist) - 1)

    for index in to_claim:
        try:
            store.claim_wishlist_item(index)
        except CardError as e:
            logger.error("Claim of item %d rejected: %s", index, e)
            errors.append(e)

    _set_text_fields(store.set_price_band, "Price band", cfg.get("price_bands", {}), errors)
    _set_text_fields(store.set_membership_id, "Membership id", cfg.get("membership_ids", {}), errors)

    privacy = cfg.get("privacy", {})
    for key, setter in (
        ("level", store.set_privacy_level),
        ("wishlist_visibility", store.set_wishlist_visibility),
    ):
        if key not in privacy:
            continue
        try:
            setter(privacy[key])
        except CardError as e:
            logger.error("Privacy setting %s rejected: %s", key, e)
            errors.append(e)

    for key, setter in (
        ("show_price_bands", store.set_show_price_bands),
        ("hide_all_prices", store.set_hide_all_prices),
    ):
        if key not in privacy:
            continue
        if not isinstance(privacy[key], bool):
            e = ValidationError(f"Privacy setting {key} must be true or false, got {privacy[key]!r}.")
            logger.error("%s", e)
            errors.append(e)
            continue
        setter(privacy[key])

    return errors


def run_once(path: str = CONFIG_PATH, fmt: str = PREVIEW_FORMAT) -> int:
    cfg = load_config(path)
    try:
        store = build_store(cfg)
    except ValueError as e:
        logger.error("Invalid source settings: %s", e)
        raise SystemExit(1)
    errors = apply_config(store, cfg)

    card, config = store.snapshot()
    logger.debug("Card state:\n%s", build_plaintext_card(card, config))

    view = store.project()
    if fmt == "html":
        print(build_html_preview(view), end="")
    else:
        print(build_plaintext_preview(view), end="")

    if cfg.get("share"):
        ShareMetrics().simulate_share()

    if errors:
        logger.warning("%d operation(s) were rejected.", len(errors))
    return 0


if __name__ == "__main__":
    try:
        raise SystemExit(run_once())
    except SystemExit:
        raise
    except Exception as e:
        logger.exception("Fatal card error: %s", e)
        raise SystemExit(2)
