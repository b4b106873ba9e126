"""Tunable constants for the analyzers.

Defaults reproduce the dashboard's documented behavior. Hosts can override
any field through ``DA_<FIELD>`` environment variables (for example
``DA_TOP_N=3``) by calling :meth:`AnalyticsSettings.from_env`; the engine
itself never reads the environment.
"""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError

_ENV_PREFIX = "DA_"


class AnalyticsSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    # Cap applied to recurring patterns, anomalies, comparisons and correlations
    top_n: int = Field(default=5, ge=1)
    anomaly_min_sample: int = Field(default=10, ge=1)
    anomaly_z_threshold: float = Field(default=2.0, gt=0)
    # |change| below this percentage is classified as "stable"
    stable_threshold_pct: float = Field(default=5.0, ge=0)
    recurring_window_days: int = Field(default=30, ge=1)
    recurring_key_length: int = Field(default=20, ge=1)
    correlation_min_count: int = Field(default=2, ge=1)
    efficiency_days: int = Field(default=5, ge=1)
    week_days: int = Field(default=7, ge=1)
    quarter_days: int = Field(default=90, ge=1)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> AnalyticsSettings:
        """Build settings from ``DA_*`` variables, falling back to defaults.

        Empty values are ignored. Unparseable values raise ``ValueError``
        naming the offending variable.
        """

        env = os.environ if environ is None else environ
        overrides: dict[str, str] = {}
        for name in cls.model_fields:
            raw = env.get(_ENV_PREFIX + name.upper())
            if raw is not None and raw.strip():
                overrides[name] = raw.strip()

        try:
            return cls.model_validate(overrides)
        except ValidationError as e:
            bad = sorted(
                _ENV_PREFIX + str(err["loc"][0]).upper() for err in e.errors() if err["loc"]
            )
            raise ValueError(f"Invalid analytics settings in environment: {', '.join(bad)}") from e


DEFAULT_SETTINGS = AnalyticsSettings()


def resolve_settings(settings: AnalyticsSettings | None) -> AnalyticsSettings:
    return DEFAULT_SETTINGS if settings is None else settings


__all__ = ["AnalyticsSettings", "DEFAULT_SETTINGS", "resolve_settings"]
