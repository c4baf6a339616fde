"""Merchant URL → affiliate tracking URL conversion."""

from __future__ import annotations

from afflink.brands import near_miss_domains
from afflink.models import BrandIndex, ConversionResult
from afflink.statuses import ConversionError
from afflink.utils.urls import encode_component, extract_domain

TARGET_PARAM = "t"

_MESSAGES = {
    ConversionError.EMPTY_INPUT: "Please enter a URL.",
    ConversionError.INVALID_URL_FORMAT: "Invalid URL format.",
    ConversionError.BRAND_NOT_FOUND: "This site is not in the affiliate network's brand list.",
}


def build_tracking_url(tracking_link: str, target_url: str) -> str:
    """Append the encoded target to a tracking link.

    The tracking endpoint expects ``&t=`` after whatever the link already holds,
    so the separator is never chosen based on the link's shape.
    """
    return f"{tracking_link}&{TARGET_PARAM}={encode_component(target_url)}"


def convert(input_url: str | None, index: BrandIndex) -> ConversionResult:
    """Resolve *input_url* against the brand index by exact domain match."""
    if not input_url or not input_url.strip():
        return ConversionResult(error=ConversionError.EMPTY_INPUT)

    domain = extract_domain(input_url)
    if not domain:
        return ConversionResult(error=ConversionError.INVALID_URL_FORMAT)

    entry = index.get(domain)
    if entry is None:
        return ConversionResult(
            error=ConversionError.BRAND_NOT_FOUND,
            domain=domain,
            near_misses=near_miss_domains(domain, index),
        )

    return ConversionResult(
        url=build_tracking_url(entry.tracking_link, input_url),
        domain=domain,
        brand=entry.name,
    )


def describe(result: ConversionResult) -> str:
    """User-facing message for a conversion result."""
    if result.ok:
        return f"Converted ({result.brand or result.domain}): {result.url}"
    if result.error == ConversionError.BRAND_NOT_FOUND and result.near_misses:
        similar = ", ".join(result.near_misses)
        return f'No matching brand for "{result.domain}". Similar domains: {similar}'
    return _MESSAGES[result.error]
