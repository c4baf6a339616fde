"""YAML config loading with env var overrides."""

from __future__ import annotations

from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel

from afflink.settings import Settings

DEFAULT_API_BASE = "https://api.pub.affiliates.one/api/v2"


class AffiliateApiConfig(BaseModel):
    base_url: str = DEFAULT_API_BASE
    per_page: int = 500
    locale: str = "zh-TW"


class AppConfig(BaseModel):
    api: AffiliateApiConfig = AffiliateApiConfig()
    settings: Settings = Settings()


def load_config(config_path: str = "config.yaml") -> AppConfig:
    """Load config from YAML file; AFFLINK_* env vars override the settings section."""
    load_dotenv()

    data: dict = {}
    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            data = yaml.safe_load(f) or {}

    return AppConfig(
        api=AffiliateApiConfig(**(data.get("api") or {})),
        settings=Settings(**(data.get("settings") or {})),
    )
