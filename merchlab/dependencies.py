# dependencies.py
"""
FastAPI dependencies handing the shared clients to request handlers.

The app builds one store, one catalog client and one copywriter at startup
and keeps them on ``app.state``; tests swap them through
``app.dependency_overrides``.
"""

from fastapi import Request

from merchlab.catalog import ShopifyCatalog
from merchlab.copywriter import GeminiCopywriter
from merchlab.settings import Settings
from merchlab.store import DesignStore


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> DesignStore:
    return request.app.state.store


def get_catalog(request: Request) -> ShopifyCatalog:
    return request.app.state.catalog


def get_copywriter(request: Request) -> GeminiCopywriter:
    return request.app.state.copywriter
