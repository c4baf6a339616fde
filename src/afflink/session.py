"""Link session: owns the API key, the brand index, and their lifecycle.

create → load / save_key → convert* → clear
"""

from __future__ import annotations

import httpx
import structlog

from afflink.api import fetch_offers, mask_key
from afflink.brands import build_index
from afflink.config import AffiliateApiConfig
from afflink.converter import convert
from afflink.exceptions import AffiliateApiError, MalformedResponseError
from afflink.keystore import KeyStore
from afflink.models import BrandIndex, BrandOffer, ConversionResult, LoadResult
from afflink.statuses import KeyStatus

# Upstream answers these for unknown or revoked keys
_UNAUTHORIZED_STATUSES = (401, 403)


class LinkSession:
    """Converts URLs against the brand index of one affiliate API key."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        store: KeyStore,
        log: structlog.stdlib.BoundLogger,
        api_config: AffiliateApiConfig | None = None,
    ) -> None:
        self.client = client
        self.store = store
        self.log = log
        self.api_config = api_config or AffiliateApiConfig()
        self._api_key: str | None = None
        self._index: BrandIndex = {}
        self._status: KeyStatus | None = None
        self._offer_count = 0
        self._generation = 0

    @property
    def api_key(self) -> str | None:
        return self._api_key

    @property
    def index(self) -> BrandIndex:
        return self._index

    @property
    def status(self) -> KeyStatus | None:
        return self._status

    @property
    def offer_count(self) -> int:
        return self._offer_count

    @property
    def brand_count(self) -> int:
        return len(self._index)

    async def load(self) -> LoadResult | None:
        """Validate the stored key, if any. Returns None when nothing is stored."""
        key = self.store.get()
        if not key:
            self.log.info("session.no_stored_key")
            return None
        return await self.validate_and_load(key)

    async def save_key(self, api_key: str) -> LoadResult:
        """Persist *api_key* and load its brands.

        The key is kept in the store even when validation fails. A blank key is
        rejected without touching the store or the current key and index.
        """
        key = (api_key or "").strip()
        if not key:
            self.log.info("session.blank_key_ignored")
            return LoadResult(status=KeyStatus.INVALID, detail="API key is empty.")
        self.store.set(key)
        self.log.info("session.key_saved", key=mask_key(key))
        return await self.validate_and_load(key)

    async def validate_and_load(self, api_key: str) -> LoadResult:
        """Check *api_key* against the affiliate API and rebuild the index from it.

        Only the most recently started call may update the session; results of
        calls overtaken by a newer one (or by clear()) are returned but not applied.
        """
        key = (api_key or "").strip()
        self._generation += 1
        generation = self._generation

        if not key:
            result = LoadResult(status=KeyStatus.INVALID, detail="API key is empty.")
        else:
            result = await self._check_key(key)

        if generation != self._generation:
            self.log.info("session.stale_load_discarded", generation=generation, latest=self._generation)
            return result

        self._api_key = key or None
        self._status = result.status
        self._offer_count = result.offer_count
        self._index = result.index
        self.log.info(
            "session.loaded",
            status=str(result.status),
            offers=result.offer_count,
            brands=result.brand_count,
        )
        return result

    def convert(self, url: str | None) -> ConversionResult:
        result = convert(url, self._index)
        self.log.debug("session.converted", domain=result.domain, ok=result.ok, error=result.error)
        return result

    def clear(self) -> None:
        """Forget the stored key and the index; in-flight loads become stale."""
        self.store.delete()
        self._generation += 1
        self._api_key = None
        self._index = {}
        self._status = None
        self._offer_count = 0
        self.log.info("session.cleared")

    async def _check_key(self, key: str) -> LoadResult:
        # There is no "validate key" endpoint: an empty Active list is retried
        # without the approval filter to tell a bad key from an account with no brands.
        try:
            offers = await self._fetch(key, active_only=True)
            if offers:
                return LoadResult(status=KeyStatus.VALID, offer_count=len(offers), index=build_index(offers))

            fallback = await self._fetch(key, active_only=False)
        except AffiliateApiError as exc:
            return _failure(exc)

        if fallback:
            return LoadResult(
                status=KeyStatus.VALID_NO_BRANDS,
                detail="The key works but the account has no approved brands yet.",
            )
        return LoadResult(status=KeyStatus.INVALID, detail="No offers were returned for this API key.")

    async def _fetch(self, key: str, *, active_only: bool) -> list[BrandOffer]:
        try:
            return await fetch_offers(self.client, key, self.api_config, self.log, active_only=active_only)
        # JSON without a data array counts as no offers; undecodable bodies propagate
        except MalformedResponseError:
            return []


def _failure(exc: AffiliateApiError) -> LoadResult:
    if exc.status_code in _UNAUTHORIZED_STATUSES:
        return LoadResult(status=KeyStatus.INVALID, detail=str(exc))
    return LoadResult(status=KeyStatus.TRANSPORT_ERROR, detail=str(exc))
