"""Monthly cash flow planner page."""

from __future__ import annotations

import streamlit as st

from analytics.monthly import build_monthly_frame
from app.layout import card
from core.formatting import format_currency, format_month_label
from core.projection import ProjectionResult
from visualization import build_monthly_chart


def _render_minimums(result: ProjectionResult, symbol: str) -> None:
    cols = st.columns((1, 1))
    cols[0].metric(
        "Minimum (every event)",
        format_currency(result.balance.minimum_balance, symbol),
    )
    cols[0].caption(f"Occurs on {result.balance.minimum_balance_date:%d %b %Y}")
    cols[1].metric(
        "Minimum (month end)",
        format_currency(result.monthly.minimum_balance, symbol),
    )
    cols[1].caption(f"Occurs on {result.monthly.minimum_balance_date:%d %b %Y}")
    if result.minimum_balance_divergence > 0:
        st.warning(
            "The month-end minimum is higher than the event-level minimum: "
            "the balance dips inside a month and recovers before it closes."
        )


def render_page(result: ProjectionResult, symbol: str = "$") -> None:
    """Render the planner page."""

    st.title("Planner")

    with card("Minimum balance", suffix=result.granularity.value):
        _render_minimums(result, symbol)

    frame = build_monthly_frame(result.monthly)
    with card("Monthly cash flow", suffix=f"Net {format_currency(result.monthly.total_net_flow, symbol)}"):
        st.plotly_chart(build_monthly_chart(frame, currency_symbol=symbol), use_container_width=True)
        if not frame.empty:
            display = frame.assign(Month=frame["Month"].map(format_month_label))
            st.dataframe(display, use_container_width=True, hide_index=True)


__all__ = ["render_page"]
