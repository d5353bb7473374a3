"""Plotly chart builders for the Capflow dashboard."""

from __future__ import annotations

from typing import Sequence

import pandas as pd
import plotly.graph_objects as go

from core.models import EventCluster

from .theme import theme_tokens

TOKENS = theme_tokens()

__all__ = [
    "build_balance_chart",
    "build_timeline_chart",
    "build_monthly_chart",
]


def _empty_plotly_figure(message: str) -> go.Figure:
    fig = go.Figure()
    fig.update_layout(
        annotations=[
            dict(
                text=message,
                x=0.5,
                y=0.5,
                xref="paper",
                yref="paper",
                showarrow=False,
                font=dict(color=TOKENS.neutral_grey, size=14, family=TOKENS.label_font),
            )
        ],
        xaxis=dict(visible=False),
        yaxis=dict(visible=False),
        margin=dict(l=0, r=0, t=20, b=0),
        plot_bgcolor="rgba(0,0,0,0)",
        paper_bgcolor="rgba(0,0,0,0)",
    )
    return fig


def _apply_layout(fig: go.Figure, yaxis_title: str) -> go.Figure:
    fig.update_layout(
        title="",
        xaxis_title="Date",
        yaxis_title=yaxis_title,
        margin=dict(l=0, r=0, t=20, b=0),
        hovermode="closest",
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1.0),
        xaxis=dict(showgrid=False, tickformat=TOKENS.time_format),
        yaxis=dict(showgrid=True, gridcolor=TOKENS.neutral_background, zeroline=True),
        plot_bgcolor="rgba(0,0,0,0)",
        paper_bgcolor="rgba(0,0,0,0)",
    )
    return fig


def build_balance_chart(
    balance_df: pd.DataFrame,
    minimum_date: pd.Timestamp | None = None,
    minimum_balance: float | None = None,
    currency_symbol: str | None = "$",
) -> go.Figure:
    """Render the running balance as a step line with the minimum highlighted."""

    if balance_df.empty:
        return _empty_plotly_figure("No balance data for this window.")

    currency_prefix = currency_symbol or ""
    hover_template = f"%{{x|{TOKENS.time_format}}}<br>{currency_prefix}%{{y:,.2f}}<extra></extra>"

    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=balance_df["Date"],
            y=balance_df["Balance"],
            mode="lines+markers",
            name="Balance",
            line=dict(color=TOKENS.brand_blue, width=3, shape="hv"),
            marker=dict(size=6, color=TOKENS.brand_blue, line=dict(color=TOKENS.neutral_white, width=1.2)),
            fill="tozeroy",
            fillcolor=TOKENS.brand_blue_soft,
            hovertemplate=hover_template,
        )
    )

    if minimum_date is not None and minimum_balance is not None:
        fig.add_trace(
            go.Scatter(
                x=[minimum_date],
                y=[minimum_balance],
                mode="markers",
                name="Minimum",
                marker=dict(size=12, color=TOKENS.accent_orange, line=dict(color=TOKENS.neutral_white, width=2)),
                hovertemplate=hover_template,
            )
        )

    if (balance_df["Balance"] < 0).any():
        fig.add_hline(y=0, line=dict(color=TOKENS.danger_red, width=1, dash="dot"))

    return _apply_layout(fig, "Balance")


def build_timeline_chart(
    clusters: Sequence[EventCluster],
    currency_symbol: str | None = "$",
    empty_message: str = "No cash flow events in this window.",
) -> go.Figure:
    """Place each cluster at its centroid, sized by the gross amount it carries."""

    if not clusters:
        return _empty_plotly_figure(empty_message)

    currency_prefix = currency_symbol or ""
    rows = []
    for index, cluster in enumerate(clusters):
        lines = [
            f"{member.date:%d %b} · {member.description} · {currency_prefix}{member.signed_amount:,.2f}"
            for member in cluster.members
        ]
        dominant = max(cluster.members, key=lambda member: abs(member.signed_amount)).category
        rows.append(
            {
                "cluster": index,
                "date": cluster.centroid_date,
                "net": cluster.net_flow,
                "gross": cluster.total_inflow + cluster.total_outflow,
                "count": len(cluster.members),
                "color": TOKENS.color_for(dominant),
                "detail": "<br>".join(lines),
            }
        )
    frame = pd.DataFrame(rows)
    peak = float(frame["gross"].max()) or 1.0
    sizes = 14 + 26 * (frame["gross"] / peak)

    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=frame["date"],
            y=frame["net"],
            mode="markers+text",
            name="Events",
            text=frame["count"].astype(str),
            textposition="middle center",
            textfont=dict(color=TOKENS.neutral_white, size=11),
            marker=dict(size=sizes, color=frame["color"], line=dict(color=TOKENS.neutral_white, width=2)),
            customdata=frame[["detail"]],
            hovertemplate="%{customdata[0]}<extra></extra>",
            showlegend=False,
        )
    )
    return _apply_layout(fig, "Net flow")


def build_monthly_chart(monthly_df: pd.DataFrame, currency_symbol: str | None = "$") -> go.Figure:
    """Render inflow and outflow bars per month with the closing balance line."""

    if monthly_df.empty:
        return _empty_plotly_figure("No months in this window.")

    currency_prefix = currency_symbol or ""
    hover_template = f"%{{x}}<br>{currency_prefix}%{{y:,.2f}}<extra></extra>"
    inflow = monthly_df["CapitalIn"] + monthly_df["OperationalIn"]
    outflow = monthly_df["CapitalOut"] + monthly_df["OperationalOut"]

    fig = go.Figure()
    fig.add_trace(
        go.Bar(
            x=monthly_df["Month"],
            y=inflow,
            name="Inflow",
            marker_color=TOKENS.inflow_green,
            hovertemplate=hover_template,
        )
    )
    fig.add_trace(
        go.Bar(
            x=monthly_df["Month"],
            y=-outflow,
            name="Outflow",
            marker_color=TOKENS.outflow_red,
            hovertemplate=hover_template,
        )
    )
    fig.add_trace(
        go.Scatter(
            x=monthly_df["Month"],
            y=monthly_df["ClosingBalance"],
            mode="lines+markers",
            name="Closing balance",
            line=dict(color=TOKENS.brand_blue, width=3),
            hovertemplate=hover_template,
        )
    )
    fig.update_layout(barmode="relative")
    fig = _apply_layout(fig, "Amount")
    fig.update_xaxes(type="category", title="Month")
    return fig
