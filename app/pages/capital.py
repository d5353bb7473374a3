"""Capital transactions timeline page."""

from __future__ import annotations

import pandas as pd
import streamlit as st

from app.layout import card
from core.formatting import format_currency
from core.models import EventCategory
from core.projection import ProjectionResult
from visualization import build_timeline_chart


def _capital_table(result: ProjectionResult) -> pd.DataFrame:
    rows = [
        {
            "Date": cluster_member.date.date(),
            "Type": "Sale" if cluster_member.category is EventCategory.CAPITAL_SALE else "Buy",
            "Description": cluster_member.description,
            "Amount": cluster_member.signed_amount,
        }
        for cluster in result.capital_clusters
        for cluster_member in cluster.members
    ]
    return pd.DataFrame(rows, columns=["Date", "Type", "Description", "Amount"])


def render_page(result: ProjectionResult, symbol: str = "$") -> None:
    """Render the capital transactions page."""

    st.title("Capital")
    monthly = result.monthly
    capital_in = sum(bucket.capital_in for bucket in monthly.buckets)
    capital_out = sum(bucket.capital_out for bucket in monthly.buckets)

    metric_cols = st.columns((1, 1, 1))
    metric_cols[0].metric("Capital in", format_currency(capital_in, symbol))
    metric_cols[1].metric("Capital out", format_currency(capital_out, symbol))
    metric_cols[2].metric("Net capital", format_currency(capital_in - capital_out, symbol))

    with card("Capital transactions", suffix=f"{result.context.cluster_thresholds.capital_days:g}-day grouping"):
        chart = build_timeline_chart(
            result.capital_clusters,
            currency_symbol=symbol,
            empty_message="No capital transactions in this window.",
        )
        st.plotly_chart(chart, use_container_width=True, key="capital-timeline")

    table = _capital_table(result)
    if table.empty:
        st.info("No capital transactions recorded for this window.")
    else:
        st.dataframe(table, use_container_width=True, hide_index=True)


__all__ = ["render_page"]
