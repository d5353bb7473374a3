import pandas as pd
import pytest
import streamlit as st

from config import get_settings
from config.settings import DEFAULT_OPENING_BALANCE, Settings
from core.models import ClusterStrategy, MinimumBalanceGranularity, ProjectionWindow


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults():
    settings = Settings()

    assert settings.opening_balance == DEFAULT_OPENING_BALANCE
    assert settings.cluster_thresholds.operational_days == 7
    assert settings.cluster_thresholds.capital_days == 14
    assert settings.minimum_balance_granularity is MinimumBalanceGranularity.EVENT
    assert settings.cluster_strategy is ClusterStrategy.DRIFTING


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("CAPFLOW_OPENING_BALANCE", "1250.5")
    monkeypatch.setenv("CAPFLOW_CAPITAL_CLUSTER_DAYS", "21")
    monkeypatch.setenv("CAPFLOW_MINIMUM_BALANCE_GRANULARITY", "month")

    settings = get_settings()

    assert settings.opening_balance == 1250.5
    assert settings.cluster_thresholds.capital_days == 21
    assert settings.minimum_balance_granularity is MinimumBalanceGranularity.MONTH


def test_streamlit_secrets_section_overrides(monkeypatch):
    monkeypatch.setattr(st, "secrets", {"capflow": {"currency_symbol": "€", "window_days_after": 45}})

    settings = get_settings()

    assert settings.currency_symbol == "€"
    assert settings.window_days_after == 45


def test_default_window_centres_on_today():
    settings = Settings(window_days_before=10, window_days_after=20)

    window = settings.default_window(pd.Timestamp("2025-06-15 13:45"))

    assert window.start == pd.Timestamp("2025-06-05")
    assert window.end == pd.Timestamp("2025-07-05")


def test_build_context_prefers_explicit_arguments():
    settings = Settings(opening_balance=900.0, operational_cluster_days=3)
    window = ProjectionWindow(pd.Timestamp("2025-01-01"), pd.Timestamp("2025-01-31"))

    context = settings.build_context(
        window,
        opening_balance=1500,
        granularity=MinimumBalanceGranularity.MONTH,
    )

    assert context.window is window
    assert context.opening_balance == 1500.0
    assert context.granularity is MinimumBalanceGranularity.MONTH
    assert context.cluster_thresholds.operational_days == 3


def test_build_context_falls_back_to_configured_values():
    settings = Settings(opening_balance=900.0)

    context = settings.build_context(today=pd.Timestamp("2025-06-15"))

    assert context.opening_balance == 900.0
    assert context.window.start == pd.Timestamp("2025-05-31")
    assert context.granularity is MinimumBalanceGranularity.EVENT
