"""
Pytest configuration for MerchLab tests.

Sets up test environment variables and shared fakes for the catalog and
the Gemini copywriter.
"""
import os
import tempfile
from typing import List, Optional

import pytest
from fastapi.testclient import TestClient

# Set test environment variables before the app module is imported
_TEST_DIR = tempfile.mkdtemp(prefix="merchlab-tests-")
os.environ.setdefault("SHOPIFY_SHOP_NAME", "test-shop")
os.environ.setdefault("SHOPIFY_ACCESS_TOKEN", "test-access-token")
os.environ.setdefault("GEMINI_API_KEY", "test-gemini-key")
os.environ.setdefault("DATABASE_URL", f"sqlite+aiosqlite:///{_TEST_DIR}/import.db")
os.environ.setdefault("UPLOAD_DIR", os.path.join(_TEST_DIR, "uploads"))

from merchlab.catalog import CatalogProduct  # noqa: E402
from merchlab.dependencies import get_catalog, get_copywriter  # noqa: E402
from merchlab.errors import UpstreamError  # noqa: E402
from merchlab.server import create_app  # noqa: E402
from merchlab.settings import Settings  # noqa: E402


def make_product(
    title: str,
    price: Optional[str] = "10.00",
    handle: Optional[str] = None,
    image: Optional[str] = None,
    online_store_url: Optional[str] = None,
) -> CatalogProduct:
    """Builds a catalog product the way Shopify's products.json describes one."""
    return CatalogProduct.model_validate({
        "title": title,
        "handle": handle or title.lower().replace(" ", "-"),
        "online_store_url": online_store_url,
        "variants": [] if price is None else [{"price": price}],
        "images": [] if image is None else [{"src": image}],
    })


class FakeCatalog:
    """Stands in for ShopifyCatalog; records every query."""

    shop_domain = "test-shop.myshopify.com"

    def __init__(self, products: Optional[List[CatalogProduct]] = None, error: Optional[Exception] = None):
        self.products = products or []
        self.error = error
        self.calls = []

    async def list_products(self, tags: str, limit: int) -> List[CatalogProduct]:
        self.calls.append({"tags": tags, "limit": limit})
        if self.error is not None:
            raise self.error
        return self.products[:limit]

    def fallback_url(self, handle: Optional[str]) -> str:
        return f"https://{self.shop_domain}/products/{handle or ''}"


class FakeCopywriter:
    def __init__(self, text: str = "Happy gifting!", error: Optional[Exception] = None):
        self.text = text
        self.error = error
        self.prompts = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def app_settings(tmp_path):
    return Settings(
        SHOPIFY_SHOP_NAME="test-shop",
        SHOPIFY_ACCESS_TOKEN="test-access-token",
        GEMINI_API_KEY="test-gemini-key",
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'merchlab.db'}",
        UPLOAD_DIR=str(tmp_path / "uploads"),
    )


@pytest.fixture
def db_path(app_settings):
    return app_settings.DATABASE_URL.split("///", 1)[1]


@pytest.fixture
def catalog():
    return FakeCatalog()


@pytest.fixture
def copywriter():
    return FakeCopywriter()


@pytest.fixture
def upstream_failure():
    return UpstreamError("Failed to fetch suggestions", error=RuntimeError("shopify is down"))


@pytest.fixture
def client(app_settings, catalog, copywriter):
    """Test client with a fresh SQLite store and fake upstream services."""
    app = create_app(app_settings)
    app.dependency_overrides[get_catalog] = lambda: catalog
    app.dependency_overrides[get_copywriter] = lambda: copywriter

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
