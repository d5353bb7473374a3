"""Centralised configuration handling for Capflow."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping

import pandas as pd
import streamlit as st
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.models import (
    ClusterStrategy,
    ClusterThresholds,
    MinimumBalanceGranularity,
    ProjectionContext,
    ProjectionWindow,
)

DEFAULT_OPENING_BALANCE = 50000.0
DEFAULT_DATA_PATH = Path(__file__).resolve().parent.parent / "data" / "seed.json"


def _streamlit_section(name: str) -> Mapping[str, Any] | None:
    """Return a mapping from Streamlit secrets for the given section."""

    try:
        if hasattr(st, "secrets") and name in st.secrets:
            section = st.secrets[name]
            if isinstance(section, Mapping):
                return section
            return dict(section)
    except Exception:  # pragma: no cover - accessing secrets may fail in tests
        return None
    return None


class Settings(BaseSettings):
    """Application settings sourced from env vars and Streamlit secrets."""

    opening_balance: float = DEFAULT_OPENING_BALANCE
    operational_cluster_days: float = 7
    capital_cluster_days: float = 14
    window_days_before: int = 15
    window_days_after: int = 15
    minimum_balance_granularity: MinimumBalanceGranularity = MinimumBalanceGranularity.EVENT
    cluster_strategy: ClusterStrategy = ClusterStrategy.DRIFTING
    currency_symbol: str = "$"
    data_path: Path = DEFAULT_DATA_PATH
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="CAPFLOW_", extra="ignore")

    @property
    def cluster_thresholds(self) -> ClusterThresholds:
        return ClusterThresholds(
            operational_days=self.operational_cluster_days,
            capital_days=self.capital_cluster_days,
        )

    def default_window(self, today: pd.Timestamp | None = None) -> ProjectionWindow:
        today = pd.Timestamp.today() if today is None else today
        return ProjectionWindow.around(today, self.window_days_before, self.window_days_after)

    def build_context(
        self,
        window: ProjectionWindow | None = None,
        *,
        opening_balance: float | None = None,
        granularity: MinimumBalanceGranularity | None = None,
        today: pd.Timestamp | None = None,
    ) -> ProjectionContext:
        """Assemble a projection context, falling back to configured defaults."""

        return ProjectionContext(
            window=window or self.default_window(today),
            opening_balance=self.opening_balance if opening_balance is None else float(opening_balance),
            cluster_thresholds=self.cluster_thresholds,
            granularity=granularity or self.minimum_balance_granularity,
            cluster_strategy=self.cluster_strategy,
        )


@lru_cache
def get_settings() -> Settings:
    """Load and cache application settings."""

    overrides: dict[str, Any] = {}
    secrets_section = _streamlit_section("capflow")
    if secrets_section:
        overrides = {key: secrets_section.get(key) for key in Settings.model_fields}

    return Settings(**{k: v for k, v in overrides.items() if v is not None})
