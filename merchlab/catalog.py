# catalog.py
import logging
from typing import List, Optional

import httpx
from pydantic import BaseModel, ValidationError as SchemaValidationError, field_validator

from merchlab.errors import UpstreamError
from merchlab.settings import Settings

# --- Configuration & Setup ---
logger = logging.getLogger(__name__)


# --- Pydantic Schemas for Shopify's product listing ---

class CatalogVariant(BaseModel):
    """Internal model for one variant; only the price matters here."""
    price: Optional[float] = None

    @field_validator("price", mode="before")
    @classmethod
    def _unparseable_price_is_none(cls, value):
        try:
            return float(value)
        except (TypeError, ValueError):
            return None


class CatalogImage(BaseModel):
    src: Optional[str] = None


class CatalogProduct(BaseModel):
    """A product as returned by the Shopify Admin API, validated before use."""
    title: Optional[str] = ""
    handle: Optional[str] = None
    online_store_url: Optional[str] = None
    tags: str = ""
    variants: List[CatalogVariant] = []
    images: List[CatalogImage] = []


class _ShopifyProductsResponse(BaseModel):
    """Top-level structure of Shopify's products.json response."""
    products: List[CatalogProduct]


# --- Client ---

class ShopifyCatalog:
    """
    Product search against the Shopify Admin REST API.

    The tag filter is passed straight through; how a comma-separated tag
    list is matched is up to Shopify.
    """

    def __init__(self, app_settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.shop_domain = app_settings.shop_domain
        self.api_url = (
            f"https://{self.shop_domain}/admin/api/"
            f"{app_settings.SHOPIFY_API_VERSION}/products.json"
        )
        self._client = httpx.AsyncClient(
            transport=transport,
            timeout=app_settings.SHOPIFY_TIMEOUT,
            headers={"X-Shopify-Access-Token": app_settings.SHOPIFY_ACCESS_TOKEN},
        )

    async def list_products(self, tags: str, limit: int) -> List[CatalogProduct]:
        """
        Fetches up to ``limit`` products matching ``tags``.

        Raises:
            UpstreamError: On a network error, a 4xx/5xx answer or a response
                that does not look like a product listing.
        """
        params = {"limit": limit, "tags": tags}
        try:
            logger.info(f"📡 Fetching up to {limit} products tagged '{tags}' from Shopify...")
            response = await self._client.get(self.api_url, params=params)
            response.raise_for_status()
            validated = _ShopifyProductsResponse.model_validate(response.json())
        except (httpx.RequestError, httpx.HTTPStatusError, SchemaValidationError, ValueError) as e:
            raise UpstreamError(
                "Failed to fetch suggestions",
                error=e,
                details={"source": "shopify", "tags": tags},
            ) from e

        logger.info(f"✅ Retrieved {len(validated.products)} products from Shopify.")
        return validated.products

    def fallback_url(self, handle: Optional[str]) -> str:
        """Storefront URL built from the shop domain and the product handle."""
        return f"https://{self.shop_domain}/products/{handle or ''}"

    async def aclose(self) -> None:
        await self._client.aclose()
