"""Shared test fixtures: SQLite key store and affiliate API fakes."""

from __future__ import annotations

from unittest.mock import MagicMock

import httpx
import pytest

from afflink.config import AffiliateApiConfig
from afflink.db import get_engine, init_db
from afflink.keystore import KeyStore

API_BASE = "https://api.affiliates.test/api/v2"


def _clone(resp: httpx.Response) -> httpx.Response:
    return httpx.Response(resp.status_code, headers=resp.headers, content=resp.content)


@pytest.fixture()
def engine(tmp_path):
    eng = get_engine(f"sqlite:///{tmp_path / 'afflink.db'}")
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture()
def store(engine):
    return KeyStore(engine)


@pytest.fixture()
def api_config():
    return AffiliateApiConfig(base_url=API_BASE, per_page=500, locale="zh-TW")


@pytest.fixture()
def offers_url(api_config):
    return f"{api_config.base_url}/affiliates/offers.json"


@pytest.fixture()
def log():
    return MagicMock()


@pytest.fixture()
def make_offer():
    """Factory for raw offer dicts shaped like the affiliate API's."""

    def _make(
        name: str = "Nike",
        preview_url: str | None = "https://www.nike.com/tw",
        tracking_link: str | None = "https://aff.example/nike?x=1",
        **extra: object,
    ) -> dict:
        return {"name": name, "preview_url": preview_url, "tracking_link": tracking_link, **extra}

    return _make


@pytest.fixture()
def offers_handler():
    """Factory for respx side effects answering the Active-filtered and unfiltered requests differently."""

    def _make(active: httpx.Response, fallback: httpx.Response | None = None):
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            if request.url.params.get("approval_statuses") == "Active":
                return _clone(active)
            if fallback is not None:
                return _clone(fallback)
            return httpx.Response(200, json={"data": []})

        handler.calls = calls
        return handler

    return _make
