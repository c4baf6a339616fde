"""Pydantic models for offers, the brand index, and operation results."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from afflink.statuses import ConversionError, KeyStatus


class BrandOffer(BaseModel):
    """One offer record from the affiliate API's ``data`` array."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = ""
    preview_url: str | None = None
    tracking_link: str | None = None

    @field_validator("name", mode="before")
    @classmethod
    def _none_name_to_empty(cls, value: object) -> object:
        return "" if value is None else value


class BrandIndexEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    tracking_link: str


BrandIndex = dict[str, BrandIndexEntry]


class ConversionResult(BaseModel):
    """Either a tracking URL or the reason none could be built."""

    model_config = ConfigDict(frozen=True)

    url: str | None = None
    error: ConversionError | None = None
    domain: str | None = None
    brand: str | None = None
    near_misses: list[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.url is not None


class LoadResult(BaseModel):
    """Tagged outcome of validating a key and loading its brand index."""

    model_config = ConfigDict(frozen=True)

    status: KeyStatus
    offer_count: int = 0
    index: BrandIndex = Field(default_factory=dict)
    detail: str | None = None

    @property
    def brand_count(self) -> int:
        return len(self.index)
