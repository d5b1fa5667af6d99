# recommendations.py
"""
Gift and style suggestions built from the Shopify catalog.

Both flows query the catalog for a handful of tagged products and project
them into the small ``Suggestion`` shape the storefront renders. GiftGenie
additionally filters by budget and, when the caller has not written one,
asks Gemini for a gift message.
"""

import logging
import math
from typing import List, Optional

from pydantic import BaseModel

from merchlab.catalog import CatalogProduct, ShopifyCatalog
from merchlab.copywriter import GeminiCopywriter, gift_message_prompt
from merchlab.errors import ValidationError

logger = logging.getLogger(__name__)

# Products requested from the catalog per suggestion query.
SUGGESTION_LIMIT = 5


class Suggestion(BaseModel):
    title: str
    url: str
    image: str = ""


class GiftSuggestions(BaseModel):
    suggestions: List[Suggestion]
    message: str


class StyleSuggestions(BaseModel):
    suggestions: List[Suggestion]


# ===================================================================
# Product projection
# ===================================================================

def first_variant_price(product: CatalogProduct) -> Optional[float]:
    """Price of the first variant, or None if there is no usable price."""
    if not product.variants:
        return None
    price = product.variants[0].price
    if price is None or not math.isfinite(price):
        return None
    return price


def first_image_src(product: CatalogProduct) -> str:
    if not product.images:
        return ""
    return product.images[0].src or ""


def to_suggestion(product: CatalogProduct, catalog: ShopifyCatalog) -> Suggestion:
    return Suggestion(
        title=product.title or "",
        url=product.online_store_url or catalog.fallback_url(product.handle),
        image=first_image_src(product),
    )


# ===================================================================
# Input helpers
# ===================================================================

def is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def require_fields(**fields: Optional[str]) -> None:
    """Raises ValidationError naming every blank field."""
    missing = [name for name, value in fields.items() if is_blank(value)]
    if missing:
        raise ValidationError(details={"missing": missing})


def parse_budget(budget: str) -> float:
    try:
        value = float(budget)
    except (TypeError, ValueError):
        value = math.nan
    if not math.isfinite(value):
        raise ValidationError("Budget must be a number", details={"budget": budget})
    return value


def style_tags(gender: str, skin_tone: str, body_type: Optional[str] = None) -> str:
    tags = f"{gender},{skin_tone}"
    if not is_blank(body_type):
        tags += f",{body_type}"
    return tags


# ===================================================================
# Pipelines
# ===================================================================

async def gift_suggestions(
    catalog: ShopifyCatalog,
    copywriter: GeminiCopywriter,
    relationship: Optional[str],
    vibe: Optional[str],
    budget: Optional[str],
    message: Optional[str] = None,
) -> GiftSuggestions:
    """
    Products tagged with ``vibe`` that fit the budget, plus a gift message.

    The caller's message is returned untouched; only when it is absent or
    empty is Gemini asked to write one. Any catalog or generation failure
    aborts the whole request.
    """
    require_fields(relationship=relationship, vibe=vibe, budget=budget)
    max_price = parse_budget(budget)

    products = await catalog.list_products(tags=vibe, limit=SUGGESTION_LIMIT)
    suggestions = []
    for product in products[:SUGGESTION_LIMIT]:
        price = first_variant_price(product)
        if price is not None and price <= max_price:
            suggestions.append(to_suggestion(product, catalog))

    if not message:
        message = await copywriter.generate(gift_message_prompt(relationship, vibe))

    logger.info(f"GiftGenie: {len(suggestions)} of {len(products)} products within budget.")
    return GiftSuggestions(suggestions=suggestions, message=message)


async def style_suggestions(
    catalog: ShopifyCatalog,
    gender: Optional[str],
    skin_tone: Optional[str],
    body_type: Optional[str] = None,
) -> StyleSuggestions:
    """Products matching the shopper's gender, skin tone and, if given, body type."""
    require_fields(gender=gender, skin_tone=skin_tone)

    products = await catalog.list_products(
        tags=style_tags(gender, skin_tone, body_type),
        limit=SUGGESTION_LIMIT,
    )
    return StyleSuggestions(
        suggestions=[to_suggestion(p, catalog) for p in products[:SUGGESTION_LIMIT]]
    )
