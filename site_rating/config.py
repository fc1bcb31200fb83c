"""
Runtime configuration for site rating.

Centralises the environment variable names and defaults used by
the score calculator and the block list store.

Uses ``pydantic_settings.BaseSettings`` for automatic environment
variable binding, type coercion, and validation.
"""

from __future__ import annotations

import functools
import pathlib

import dotenv
import pydantic
import pydantic_settings

# Default location for persisted block lists, relative to the working directory.
DEFAULT_LIST_STORE_DIR = pathlib.Path(".cache") / "lists"


class Settings(pydantic_settings.BaseSettings):
    """Site rating settings loaded from the environment.

    Attributes:
        list_store_dir: Directory holding persisted block lists.
        log_score_calculation: Emit a per-term log line every
            time a grade is computed.
    """

    model_config = pydantic_settings.SettingsConfigDict(populate_by_name=True)

    list_store_dir: pathlib.Path = pydantic.Field(
        default=DEFAULT_LIST_STORE_DIR,
        validation_alias="SITE_RATING_LIST_DIR",
    )
    log_score_calculation: bool = pydantic.Field(
        default=True,
        validation_alias="SITE_RATING_LOG_CALCULATION",
    )


@functools.lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load ``.env`` (if present) once and return the shared settings.

    Call ``get_settings.cache_clear()`` to pick up environment changes.
    """
    dotenv.load_dotenv()
    return Settings()
