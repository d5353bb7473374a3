"""Operational cash flow timeline page."""

from __future__ import annotations

import streamlit as st

from analytics.balance import build_balance_frame
from app.layout import card
from core.formatting import build_insights, format_currency
from core.projection import ProjectionResult
from visualization import build_balance_chart, build_timeline_chart


def _render_balance_card(result: ProjectionResult, symbol: str) -> None:
    balance = result.balance
    metric_cols = st.columns((1, 1, 1))
    metric_cols[0].metric("Opening balance", format_currency(balance.opening_balance, symbol))
    metric_cols[1].metric(
        "Closing balance",
        format_currency(balance.final_balance, symbol),
        format_currency(balance.final_balance - balance.opening_balance, symbol),
    )
    metric_cols[2].metric("Minimum balance", format_currency(result.minimum_balance, symbol))
    st.caption(f"Lowest point reached on {result.minimum_balance_date:%d %b %Y}")

    chart = build_balance_chart(
        build_balance_frame(balance),
        minimum_date=balance.minimum_balance_date,
        minimum_balance=balance.minimum_balance,
        currency_symbol=symbol,
    )
    st.plotly_chart(chart, use_container_width=True, key="balance-line")


def render_page(result: ProjectionResult, symbol: str = "$") -> None:
    """Render the operational timeline page."""

    st.title("Cash Flow")
    window = result.context.window
    st.caption(f"{window.start:%d %b %Y} – {window.end:%d %b %Y}")

    with card("Running balance", suffix="Event level"):
        _render_balance_card(result, symbol)

    with card("Operational events", suffix=f"{result.context.cluster_thresholds.operational_days:g}-day grouping"):
        chart = build_timeline_chart(result.operational_clusters, currency_symbol=symbol)
        st.plotly_chart(chart, use_container_width=True, key="operational-timeline")

    with card("Insights"):
        items = "".join(f"<li>{item}</li>" for item in build_insights(result, symbol))
        st.markdown(f"<ul class='cf-insights'>{items}</ul>", unsafe_allow_html=True)


__all__ = ["render_page"]
