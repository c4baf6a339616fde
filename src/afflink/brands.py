"""Brand index construction from affiliate offer records."""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import ValidationError

from afflink.exceptions import MalformedResponseError
from afflink.models import BrandIndex, BrandIndexEntry, BrandOffer
from afflink.utils.urls import extract_domain_from_preview


def parse_offers(payload: object) -> list[BrandOffer]:
    """Turn a decoded offers.json body into BrandOffer records.

    Raises MalformedResponseError when the body has no ``data`` array.
    Items that are not objects or fail validation are dropped.
    """
    if not isinstance(payload, dict) or not isinstance(payload.get("data"), list):
        raise MalformedResponseError("Response has no data array")

    offers = []
    for item in payload["data"]:
        if not isinstance(item, dict):
            continue
        try:
            offers.append(BrandOffer.model_validate(item))
        except ValidationError:
            continue
    return offers


def build_index(offers: Iterable[BrandOffer]) -> BrandIndex:
    """Map each offer's preview domain to its brand name and tracking link.

    Offers without a usable preview URL or tracking link are skipped. When two
    offers share a domain, the later one wins.
    """
    index: BrandIndex = {}
    for offer in offers:
        domain = extract_domain_from_preview(offer.preview_url)
        tracking_link = (offer.tracking_link or "").strip()
        if not domain or not tracking_link:
            continue
        index[domain] = BrandIndexEntry(name=offer.name, tracking_link=offer.tracking_link)
    return index


def near_miss_domains(domain: str, index: BrandIndex) -> list[str]:
    """Indexed domains that contain, or are contained in, *domain*.

    Diagnostic only: the converter never resolves through these.
    """
    if not domain:
        return []
    return sorted(d for d in index if d != domain and (domain in d or d in domain))
