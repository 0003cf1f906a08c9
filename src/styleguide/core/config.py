# src/styleguide/core/config.py
from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Any, List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


def _default_prefixes() -> List[str]:
    # Most specific first: the first matching prefix decides main vs child.
    return [
        "tx_styleguide_elements_",
        "tx_styleguide_inline_",
        "tx_styleguide_",
    ]


def _split_list(value: Any) -> Any:
    """Accept JSON arrays or CSV strings from the environment."""
    if not isinstance(value, str):
        return value
    raw = value.strip()
    if not raw:
        return []
    if raw.startswith("["):
        try:
            data = json.loads(raw)
            if isinstance(data, list):
                return [str(x).strip() for x in data if str(x).strip()]
        except ValueError:
            pass
    return [p.strip() for p in raw.split(",") if p.strip()]


class Settings(BaseSettings):
    # ---- App ----
    APP_NAME: str = "styleguide"
    APP_VERSION: str = "0.1.0"
    LOG_LEVEL: str = "INFO"

    # ---- DB ----
    DATABASE_URL: str = "sqlite:///styleguide.db"
    DB_ECHO: bool = False

    # ---- Storage ----
    FILEADMIN_DIR: Path = Path("fileadmin")
    ASSET_FOLDER: str = "styleguide"

    # ---- TCA ----
    # Extra directories with *.yaml table definitions, loaded after the bundled ones.
    TCA_DIRS: Annotated[List[Path], NoDecode] = Field(default_factory=list)
    TABLE_PREFIXES: Annotated[List[str], NoDecode] = Field(default_factory=_default_prefixes)
    STATIC_TABLE: str = "tx_styleguide_staticdata"

    # ---- Credentials ----
    PASSWORD_HASH_ITERATIONS: int = Field(100_000, ge=1)

    # ---- Pydantic settings config ----
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="STYLEGUIDE_",
    )

    @field_validator("TCA_DIRS", "TABLE_PREFIXES", mode="before")
    @classmethod
    def _parse_lists(cls, value: Any) -> Any:
        return _split_list(value)


def get_settings() -> Settings:
    """Fresh settings read (env may have changed since import)."""
    return Settings()


settings = Settings()
__all__ = ["settings", "Settings", "get_settings"]
