"""Affiliate network API client: fetches the offers available to an API key."""

from __future__ import annotations

import httpx
import structlog

from afflink.brands import parse_offers
from afflink.config import AffiliateApiConfig
from afflink.exceptions import AffiliateApiError, InvalidJsonError
from afflink.models import BrandOffer

OFFERS_PATH = "/affiliates/offers.json"
ACTIVE_APPROVAL_STATUS = "Active"


def mask_key(api_key: str) -> str:
    """Show only the last four characters of an API key in logs."""
    if len(api_key) <= 4:
        return "*" * len(api_key)
    return "*" * (len(api_key) - 4) + api_key[-4:]


def offers_params(api_key: str, config: AffiliateApiConfig, *, active_only: bool = True) -> dict[str, str | int]:
    params: dict[str, str | int] = {"api_key": api_key}
    if active_only:
        params["approval_statuses"] = ACTIVE_APPROVAL_STATUS
    params["per_page"] = config.per_page
    params["locale"] = config.locale
    return params


async def fetch_offers(
    client: httpx.AsyncClient,
    api_key: str,
    config: AffiliateApiConfig,
    log: structlog.stdlib.BoundLogger,
    *,
    active_only: bool = True,
) -> list[BrandOffer]:
    """GET offers.json for *api_key*.

    Raises AffiliateApiError on network failure or a non-2xx status,
    InvalidJsonError when the body is not JSON, and MalformedResponseError
    (from parse_offers) when the JSON lacks a ``data`` array.
    """
    url = config.base_url.rstrip("/") + OFFERS_PATH
    params = offers_params(api_key, config, active_only=active_only)
    log.info("api.fetching_offers", key=mask_key(api_key), active_only=active_only)

    try:
        resp = await client.get(url, params=params)
    except httpx.HTTPError as exc:
        log.warning("api.fetch_failed", error=str(exc))
        raise AffiliateApiError(f"Request to affiliate API failed: {exc}") from exc

    if not resp.is_success:
        log.warning("api.bad_status", status_code=resp.status_code)
        raise AffiliateApiError(
            f"Affiliate API returned HTTP {resp.status_code}",
            status_code=resp.status_code,
        )

    try:
        payload = resp.json()
    except ValueError as exc:
        log.warning("api.invalid_json")
        raise InvalidJsonError("Affiliate API returned invalid JSON", status_code=resp.status_code) from exc

    offers = parse_offers(payload)
    log.info("api.offers_fetched", count=len(offers), active_only=active_only)
    return offers
