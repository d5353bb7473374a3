"""Shared Plotly theme tokens for Capflow visualizations."""

from __future__ import annotations

from dataclasses import dataclass, field

from core.models import EventCategory


def _category_colors() -> dict[EventCategory, str]:
    return {
        EventCategory.RECURRING: "#3498DB",
        EventCategory.NON_RECURRING: "#E74C3C",
        EventCategory.INVOICE: "#2ECC71",
        EventCategory.SUPPLIER_PAYMENT: "#F39C12",
        EventCategory.CAPITAL_BUY: "#F44336",
        EventCategory.CAPITAL_SALE: "#4CAF50",
    }


@dataclass(frozen=True)
class ThemeTokens:
    time_format: str = "%d %b"
    label_color: str = "#475569"
    label_font: str = "Inter"
    label_size: int = 12
    grid_color: str = "#EEF2FF"
    brand_blue: str = "#2563EB"
    brand_blue_soft: str = "rgba(37, 99, 235, 0.12)"
    accent_orange: str = "#F97316"
    danger_red: str = "#DC2626"
    inflow_green: str = "#16A34A"
    outflow_red: str = "#EF4444"
    neutral_grey: str = "#94A3B8"
    neutral_white: str = "#FFFFFF"
    neutral_background: str = "rgba(148, 163, 184, 0.25)"
    category_colors: dict[EventCategory, str] = field(default_factory=_category_colors)

    def color_for(self, category: EventCategory) -> str:
        return self.category_colors.get(category, self.neutral_grey)


_TOKENS = ThemeTokens()


def theme_tokens() -> ThemeTokens:
    """Return the shared visualization tokens."""

    return _TOKENS
