"""Visualization utilities for Capflow dashboards."""

from .charts import build_balance_chart, build_monthly_chart, build_timeline_chart
from .theme import theme_tokens

__all__ = [
    "build_balance_chart",
    "build_monthly_chart",
    "build_timeline_chart",
    "theme_tokens",
]
