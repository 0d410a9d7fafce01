"""Runtime configuration for dashboard loads, resolved from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from typing import Any

from dotenv import load_dotenv

from pipelines.common import DEFAULT_ATTEMPTS, DEFAULT_TIMEOUT_SECONDS
from pipelines.presets import DEFAULT_PRESETS
from pipelines.sources.dataset import DATASET_URL

DATASET_URL_ENV = "ECONOMIC_DATASET_URL"
DATASET_FORMAT_ENV = "ECONOMIC_DATASET_FORMAT"
FETCH_TIMEOUT_ENV = "FETCH_TIMEOUT_SECONDS"
FETCH_ATTEMPTS_ENV = "FETCH_ATTEMPTS"
MISSING_POLICY_ENV = "MISSING_VALUE_POLICY"
SELECTION_ENV = "DASHBOARD_SELECTION"

_FORMATS = ("json", "csv")
_MISSING_POLICIES = ("gap", "zero")


def _default_selection() -> tuple[str, ...]:
    return tuple(preset.id for preset in DEFAULT_PRESETS)


@dataclass(frozen=True)
class DashboardConfig:
    """Where the dataset lives and how a dashboard load treats it."""

    dataset_url: str = DATASET_URL
    dataset_format: str = "json"
    fetch_timeout: float = DEFAULT_TIMEOUT_SECONDS
    fetch_attempts: int = DEFAULT_ATTEMPTS
    missing_policy: str = "gap"
    selected: tuple[str, ...] = field(default_factory=_default_selection)

    def __post_init__(self) -> None:
        if self.dataset_format not in _FORMATS:
            raise ValueError(
                f"dataset_format must be one of {', '.join(_FORMATS)}, got {self.dataset_format!r}"
            )
        if self.missing_policy not in _MISSING_POLICIES:
            raise ValueError(
                f"missing_policy must be one of {', '.join(_MISSING_POLICIES)}, "
                f"got {self.missing_policy!r}"
            )
        if self.fetch_attempts < 1:
            raise ValueError("fetch_attempts must be at least 1")
        if self.fetch_timeout <= 0:
            raise ValueError("fetch_timeout must be positive")


def parse_selection(raw: str | None) -> tuple[str, ...]:
    if not raw:
        return ()
    return tuple(item.strip() for item in raw.split(",") if item.strip())


def _env_number(name: str, cast: type, default: Any) -> Any:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be a {cast.__name__}, got {raw!r}") from exc


def load_config(**overrides: Any) -> DashboardConfig:
    """Build a ``DashboardConfig`` from ``.env``/environment variables.

    Keyword overrides (e.g. from CLI flags) win over the environment; ``None``
    values are ignored.
    """

    load_dotenv()
    selection = parse_selection(os.getenv(SELECTION_ENV))
    config = DashboardConfig(
        dataset_url=os.getenv(DATASET_URL_ENV) or DATASET_URL,
        dataset_format=(os.getenv(DATASET_FORMAT_ENV) or "json").lower(),
        fetch_timeout=_env_number(FETCH_TIMEOUT_ENV, float, DEFAULT_TIMEOUT_SECONDS),
        fetch_attempts=_env_number(FETCH_ATTEMPTS_ENV, int, DEFAULT_ATTEMPTS),
        missing_policy=(os.getenv(MISSING_POLICY_ENV) or "gap").lower(),
        selected=selection or _default_selection(),
    )
    applied = {key: value for key, value in overrides.items() if value is not None}
    if applied:
        config = replace(config, **applied)
    return config


__all__ = [
    "DATASET_FORMAT_ENV",
    "DATASET_URL_ENV",
    "DashboardConfig",
    "FETCH_ATTEMPTS_ENV",
    "FETCH_TIMEOUT_ENV",
    "MISSING_POLICY_ENV",
    "SELECTION_ENV",
    "load_config",
    "parse_selection",
]
