"""orgchat configuration: constants and environment-driven settings."""

from __future__ import annotations

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Escalation walk
MAX_ESCALATION_HOPS = 10

# Directory queries
DEFAULT_SEARCH_LIMIT = 10
MAX_SEARCH_LIMIT = 100

# Classification patterns (lower-case, substring match)
HR_DEPARTMENT_PATTERNS: tuple[str, ...] = ("hr", "human resource")
HR_ROLE_PATTERNS: tuple[str, ...] = ("hr",)
LEADERSHIP_ROLE_PATTERNS: tuple[str, ...] = ("head", "director")
MANAGER_ROLE_PATTERNS: tuple[str, ...] = ("manager",)
# Exact match
ADMIN_ROLE_NAMES: frozenset[str] = frozenset({"admin", "administrator"})


class Settings(BaseSettings):
    # --- Directory ---
    org_file: str = "org.yaml"

    # --- Queries ---
    search_limit: int = DEFAULT_SEARCH_LIMIT

    # --- Logging ---
    log_level: str = "info"

    @field_validator("search_limit")
    @classmethod
    def _search_limit_in_range(cls, v: int) -> int:
        if not 1 <= v <= MAX_SEARCH_LIMIT:
            raise ValueError(
                f"search_limit must be between 1 and {MAX_SEARCH_LIMIT} (got {v})"
            )
        return v

    model_config = SettingsConfigDict(
        env_prefix="ORGCHAT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
