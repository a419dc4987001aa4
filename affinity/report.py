# affinity/report.py
import os
from pathlib import Path
from typing import Dict, List

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .models import Card, PrivacyConfig, SharedView

# Templates are package data under affinity/templates
TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"
env = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=select_autoescape(["html"]),
    keep_trailing_newline=True,
)

PREVIEW_THEME = os.getenv("PREVIEW_THEME", "dark").strip().lower()
if PREVIEW_THEME not in ("light", "dark"):
    PREVIEW_THEME = "dark"

THEMES = {
    "light": {
        "page_bg": "#f5f5f5",
        "card_bg": "#ffffff",
        "card_border": "#e0e0e0",
        "text_primary": "#202124",
        "text_secondary": "#555",
        "text_muted": "#999",
        "accent": "#1a73e8",
    },
    "dark": {
        "page_bg": "#121212",
        "card_bg": "#1E1E1E",
        "card_border": "#333333",
        "text_primary": "#F1F1F1",
        "text_secondary": "#BBBBBB",
        "text_muted": "#777777",
        "accent": "#8AB4F8",
    },
}


def _bands_to_rows(bands: Dict[str, str]) -> List[Dict[str, str]]:
    return [{"category": k, "band": v or "Not set"} for k, v in bands.items()]


def _preview_context(view: SharedView) -> dict:
    # Keys are only added for fields present on the view; templates test
    # with `is defined` so hidden fields never render, not even as blanks.
    ctx: dict = {"brands": list(view.brands)}
    if view.price_bands is not None:
        ctx["price_bands"] = _bands_to_rows(view.price_bands)
    if view.membership_id is not None:
        ctx["membership_id"] = view.membership_id
    if view.wishlist is not None:
        ctx["wishlist"] = list(view.wishlist)
    return ctx


def build_plaintext_preview(view: SharedView) -> str:
    template = env.get_template("preview_text.txt")
    return template.render(**_preview_context(view))


def build_html_preview(view: SharedView, title: str = "Brand Affinity Card", theme: str | None = None) -> str:
    theme = (theme or PREVIEW_THEME).strip().lower()
    if theme not in THEMES:
        theme = PREVIEW_THEME
    template = env.get_template(f"preview_{theme}.html")

    ctx = _preview_context(view)
    ctx["title"] = title
    ctx["colors"] = THEMES[theme]
    return template.render(**ctx)


def build_plaintext_card(card: Card, config: PrivacyConfig) -> str:
    """Owner's view of the card: everything, scores and statuses included."""
    template = env.get_template("card_text.txt")

    brand_data = [
        {"name": b.name, "score_str": f"{b.affinity_score:.1f}"}
        for b in card.brands
    ]
    wishlist_data = [
        {"index": i, "sku": it.sku, "status": it.status.value, "claimed": it.claimed}
        for i, it in enumerate(card.wishlist)
    ]
    membership_data = [
        {"provider": k, "value": v or "Not set"} for k, v in card.membership_ids.items()
    ]

    ctx = {
        "brands": brand_data,
        "wishlist": wishlist_data,
        "price_bands": _bands_to_rows(card.price_bands),
        "membership_ids": membership_data,
        "privacy_level": config.privacy_level.value,
        "wishlist_visibility": config.wishlist_visibility.value,
        "show_price_bands": config.show_price_bands,
        "hide_all_prices": config.hide_all_prices,
    }
    return template.render(**ctx)
