# settings.py
import logging
from typing import List

from pydantic_settings import BaseSettings

log = logging.getLogger(__name__)


class Settings(BaseSettings):
    # Project
    PROJECT_NAME: str = "MerchLab Backend"
    LOG_LEVEL: str = "INFO"
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # Shopify catalog
    SHOPIFY_SHOP_NAME: str = ""
    SHOPIFY_ACCESS_TOKEN: str = ""
    SHOPIFY_API_VERSION: str = "2024-10"
    SHOPIFY_TIMEOUT: float = 20.0

    # Gemini
    GEMINI_API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-2.5-flash"

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./dev.db"  # default local SQLite
    DATABASE_SSL: bool = False

    # Uploaded TeeLab designs
    UPLOAD_DIR: str = "uploads"

    # Frontend origins (CORS)
    CORS_ORIGINS: str = "*"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def shop_domain(self) -> str:
        """The shop's myshopify.com host, whether the name was given bare or in full."""
        name = self.SHOPIFY_SHOP_NAME.strip()
        if name.endswith(".myshopify.com"):
            return name
        return f"{name}.myshopify.com"

    def validate_required(self) -> None:
        """
        Checks the credentials the service cannot run without.

        Raises:
            RuntimeError: If any required variable is missing. Secret values
                are reported only as "Set" or "Missing".
        """
        required = {
            "SHOPIFY_SHOP_NAME": self.SHOPIFY_SHOP_NAME,
            "SHOPIFY_ACCESS_TOKEN": self.SHOPIFY_ACCESS_TOKEN,
            "GEMINI_API_KEY": self.GEMINI_API_KEY,
        }
        missing = [key for key, value in required.items() if not value]
        if missing:
            log.critical("Missing configuration. Check environment variables:")
            log.critical(f"SHOPIFY_SHOP_NAME: {self.SHOPIFY_SHOP_NAME or 'Missing'}")
            for key in ("SHOPIFY_ACCESS_TOKEN", "GEMINI_API_KEY"):
                log.critical(f"{key}: {'Set' if required[key] else 'Missing'}")
            raise RuntimeError(f"Missing required environment variables: {', '.join(missing)}")


# ✅ Instantiate settings globally
settings = Settings()
