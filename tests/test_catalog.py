"""Tests for the Shopify catalog client, using httpx's mock transport."""

import httpx
import pytest

from merchlab.catalog import ShopifyCatalog
from merchlab.errors import UpstreamError

PRODUCTS_JSON = {
    "products": [
        {
            "id": 1,
            "title": "Cozy Socks",
            "handle": "cozy-socks",
            "tags": "cozy, winter",
            "variants": [{"id": 11, "price": "25.00"}, {"id": 12, "price": "27.00"}],
            "images": [{"id": 21, "src": "https://cdn.shopify.com/socks.png"}],
        },
        {
            "id": 2,
            "title": "Gift Card",
            "handle": "gift-card",
            "variants": [],
            "images": [],
        },
    ]
}


def make_catalog(app_settings, handler):
    return ShopifyCatalog(app_settings, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_list_products_request_and_parsing(app_settings):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = f"{request.url.scheme}://{request.url.host}{request.url.path}"
        seen["params"] = dict(request.url.params)
        seen["token"] = request.headers.get("X-Shopify-Access-Token")
        return httpx.Response(200, json=PRODUCTS_JSON)

    catalog = make_catalog(app_settings, handler)
    products = await catalog.list_products(tags="cozy", limit=5)
    await catalog.aclose()

    assert seen["url"] == "https://test-shop.myshopify.com/admin/api/2024-10/products.json"
    assert seen["params"] == {"limit": "5", "tags": "cozy"}
    assert seen["token"] == "test-access-token"

    assert [p.title for p in products] == ["Cozy Socks", "Gift Card"]
    assert products[0].variants[0].price == 25.0
    assert products[0].images[0].src == "https://cdn.shopify.com/socks.png"
    assert products[1].variants == []


@pytest.mark.asyncio
async def test_http_error_becomes_upstream_error(app_settings):
    catalog = make_catalog(app_settings, lambda request: httpx.Response(401, json={"errors": "bad token"}))

    with pytest.raises(UpstreamError) as exc_info:
        await catalog.list_products(tags="cozy", limit=5)
    await catalog.aclose()

    assert exc_info.value.status_code == 500
    assert exc_info.value.message == "Failed to fetch suggestions"
    assert exc_info.value.details["error_type"] == "HTTPStatusError"


@pytest.mark.asyncio
async def test_network_error_becomes_upstream_error(app_settings):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    catalog = make_catalog(app_settings, handler)
    with pytest.raises(UpstreamError):
        await catalog.list_products(tags="cozy", limit=5)
    await catalog.aclose()


@pytest.mark.asyncio
async def test_unexpected_payload_becomes_upstream_error(app_settings):
    catalog = make_catalog(app_settings, lambda request: httpx.Response(200, json={"items": []}))
    with pytest.raises(UpstreamError):
        await catalog.list_products(tags="cozy", limit=5)
    await catalog.aclose()


@pytest.mark.asyncio
async def test_non_json_body_becomes_upstream_error(app_settings):
    catalog = make_catalog(app_settings, lambda request: httpx.Response(200, content=b"<html>maintenance</html>"))
    with pytest.raises(UpstreamError):
        await catalog.list_products(tags="cozy", limit=5)
    await catalog.aclose()


def test_fallback_url_accepts_full_shop_domain(app_settings):
    full_domain = app_settings.model_copy(update={"SHOPIFY_SHOP_NAME": "test-shop.myshopify.com"})
    catalog = ShopifyCatalog(full_domain)

    assert catalog.fallback_url("cozy-socks") == "https://test-shop.myshopify.com/products/cozy-socks"
    assert catalog.api_url.startswith("https://test-shop.myshopify.com/admin/")
