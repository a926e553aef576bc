"""Process Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Every setting is read from TESTGATE_* environment variables (or .env)
    - get_settings() is cached (lru_cache) — single snapshot per process;
      reloading happens strictly between runs via get_settings.cache_clear()
    - min_severity is validated against the Severity labels at load time
    - List settings accept a comma-separated string ("smoke,db") or a JSON
      array ('["smoke", "db"]'); blank items are dropped

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env support
    - Settings stay plain data; compilation into an ActivationConfig happens in core
"""

import json
from functools import lru_cache
from typing import Annotated

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from testgate.core.domain_types import Severity
from testgate.core.errors import InvalidSeverityError


class Settings(BaseSettings):
    """testgate settings from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TESTGATE_", env_file=".env", case_sensitive=False,
        extra="ignore",
    )

    # "!" name prefix disables tests unless this opt-out is set
    bang_disable: bool = False

    # Tag policy
    tags: str = ""
    include_tags: Annotated[list[str], NoDecode] = []
    exclude_tags: Annotated[list[str], NoDecode] = []

    # Severity
    min_severity: Severity = Severity.MINOR

    @field_validator("min_severity", mode="before")
    @classmethod
    def parse_severity(cls, v: object) -> Severity:
        try:
            return Severity.parse(v)
        except InvalidSeverityError as e:
            raise ValueError(e.message) from e

    # Glob patterns over test paths
    test_filters: Annotated[list[str], NoDecode] = []

    @field_validator("include_tags", "exclude_tags", "test_filters", mode="before")
    @classmethod
    def split_list(cls, v: object) -> object:
        if not isinstance(v, str):
            return v
        text = v.strip()
        if text.startswith("["):
            return json.loads(text)
        return [item.strip() for item in text.split(",") if item.strip()]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
