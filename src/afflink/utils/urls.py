"""Generic URL utilities: domain extraction and URI component encoding."""

from __future__ import annotations

import ipaddress
from urllib.parse import quote, urlsplit

import idna

# encodeURIComponent leaves these unescaped besides alphanumerics
_COMPONENT_SAFE = "-_.!~*'()"


def _normalize_host(host: str) -> str | None:
    """ASCII form of *host*: IP literals as-is, names as IDNA (punycode) labels."""
    try:
        ipaddress.ip_address(host)
    except ValueError:
        pass
    else:
        return host
    try:
        return idna.encode(host, uts46=True).decode("ascii")
    except idna.IDNAError:
        return None


def extract_domain(url: str | None) -> str | None:
    """Extract the host from an absolute URL, stripping one leading www. label.

    Internationalized hosts come back in punycode, so ``https://購物.tw`` and
    ``https://xn--g2xv08c.tw`` share a key. Returns None for anything that does
    not parse as an absolute URL with a valid host.
    """
    if not url or not isinstance(url, str):
        return None
    try:
        parsed = urlsplit(url.strip())
        host = parsed.hostname
        # Accessing .port validates it ("https://example.com:abc" raises here)
        parsed.port
    except ValueError:
        return None
    if not parsed.scheme or not host:
        return None
    host = _normalize_host(host)
    if host is None:
        return None
    if host.startswith("www."):
        host = host[4:]
    return host or None


def extract_domain_from_preview(preview_url: str | None) -> str | None:
    """Domain of an offer's preview URL; None when the offer has no preview."""
    if not preview_url:
        return None
    return extract_domain(preview_url)


def encode_component(value: str) -> str:
    """Percent-encode a whole URL so it can travel as a single query value.

    Unencodable input (lone surrogates) yields an empty string.
    """
    try:
        return quote(value, safe=_COMPONENT_SAFE, encoding="utf-8", errors="strict")
    except UnicodeEncodeError:
        return ""
