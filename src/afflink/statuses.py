"""Status enumerations for conversions and key validation."""

from __future__ import annotations

from enum import StrEnum


class ConversionError(StrEnum):
    """Why a URL could not be turned into a tracking link."""
    EMPTY_INPUT = "empty_input"
    INVALID_URL_FORMAT = "invalid_url_format"
    BRAND_NOT_FOUND = "brand_not_found"


class KeyStatus(StrEnum):
    """Outcome of probing the affiliate API with a key."""
    VALID = "valid"
    VALID_NO_BRANDS = "valid_no_brands"
    INVALID = "invalid"
    TRANSPORT_ERROR = "transport_error"
