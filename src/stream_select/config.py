"""Configuration system for stream-select.

Uses pydantic-settings for declarative, layered configuration:
init kwargs -> environment variables (STREAM_SELECT_*) -> .env file -> field defaults.

Per-run overrides are applied via resolve_config() which creates a new
config instance without mutating the defaults. Value checks that the engine
depends on (positive counts, known names) live in validate_config() so that
they raise InvalidConfigurationError before any record is read.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from stream_select.exceptions import InvalidConfigurationError
from stream_select.ordering import SortOrder

_MODES: frozenset[str] = frozenset({"normal", "random"})
_FALLBACK_MODES: frozenset[str] = frozenset({"error", "system", "seeded"})
_LOG_LEVELS: frozenset[str] = frozenset({"none", "summary", "full"})

# All known config field names (populated after class definition).
_ALL_FIELDS: frozenset[str] = frozenset()


class StreamSelectConfig(BaseSettings):
    """Configuration for a selection run.

    Resolution order: init kwargs -> env vars (STREAM_SELECT_*) -> .env file -> defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="STREAM_SELECT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Selection ---

    mode: str = Field(
        default="normal",
        description="Selection mode: 'normal' (batched top-K) or 'random' (reservoir sample)",
    )
    result_count: int = Field(
        default=10,
        description="Number of records to report (K); must be > 0",
    )
    sort_order: str = Field(
        default="descending",
        description="Score order: 'descending' or 'ascending' (also accepts 0/1)",
    )
    batch_size: int = Field(
        default=1000,
        description="Records pulled per batch in normal mode; must be > 0",
    )

    # --- Reporting ---

    bucket_count: int = Field(
        default=10,
        description="Histogram buckets over arrival position in random mode; must be > 0",
    )

    # --- Randomness ---

    entropy_source_type: str = Field(
        default="system",
        description="Primary entropy source identifier",
    )
    fallback_mode: str = Field(
        default="system",
        description="Fallback entropy source: 'error', 'system', 'seeded'",
    )
    seed: int | None = Field(
        default=None,
        description="Seed for the 'seeded' entropy source (None = fresh OS entropy)",
    )

    # --- Logging ---

    log_level: str = Field(
        default="summary",
        description="Logging verbosity: 'none', 'summary', 'full'",
    )
    diagnostic_mode: bool = Field(
        default=False,
        description="Keep every run record in memory for analysis",
    )


# Populate _ALL_FIELDS now that the class is defined.
_ALL_FIELDS = frozenset(StreamSelectConfig.model_fields.keys())


def validate_config(config: StreamSelectConfig) -> None:
    """Check the values a run depends on.

    Args:
        config: The configuration to check.

    Raises:
        InvalidConfigurationError: If any count is not positive or any
            named option is unknown.
    """
    if config.mode not in _MODES:
        raise InvalidConfigurationError(
            f"Unknown mode: {config.mode!r}. Expected one of {sorted(_MODES)}"
        )
    if config.result_count <= 0:
        raise InvalidConfigurationError(
            f"result_count must be > 0, got {config.result_count}"
        )
    if config.batch_size <= 0:
        raise InvalidConfigurationError(f"batch_size must be > 0, got {config.batch_size}")
    if config.bucket_count <= 0:
        raise InvalidConfigurationError(
            f"bucket_count must be > 0, got {config.bucket_count}"
        )
    if config.fallback_mode not in _FALLBACK_MODES:
        raise InvalidConfigurationError(
            f"Unknown fallback_mode: {config.fallback_mode!r}. "
            f"Expected one of {sorted(_FALLBACK_MODES)}"
        )
    if config.log_level not in _LOG_LEVELS:
        raise InvalidConfigurationError(
            f"Unknown log_level: {config.log_level!r}. Expected one of {sorted(_LOG_LEVELS)}"
        )
    SortOrder.parse(config.sort_order)


def resolve_config(
    defaults: StreamSelectConfig,
    overrides: dict[str, Any] | None,
) -> StreamSelectConfig:
    """Create a new config instance merging defaults with per-run overrides.

    Args:
        defaults: The base configuration loaded from environment.
        overrides: Field values to replace, keyed by field name. ``None``
            values are ignored so that unset command-line flags fall
            through to the defaults.

    Returns:
        A new StreamSelectConfig with overrides applied, or *defaults*
        itself when nothing changes.

    Raises:
        InvalidConfigurationError: If a key is unknown or a value fails
            type coercion.
    """
    if not overrides:
        return defaults

    applied: dict[str, Any] = {}
    for key, value in overrides.items():
        if key not in _ALL_FIELDS:
            raise InvalidConfigurationError(
                f"Unknown config field: {key!r}. Available: {', '.join(sorted(_ALL_FIELDS))}"
            )
        if value is not None:
            applied[key] = value

    if not applied:
        return defaults

    # model_copy(update=...) skips validation, so string "100" would not
    # be coerced to int 100. model_validate runs the full validator.
    merged = defaults.model_dump()
    merged.update(applied)
    try:
        return StreamSelectConfig.model_validate(merged)
    except ValidationError as exc:
        raise InvalidConfigurationError(str(exc)) from exc
