"""Shared layout primitives for the Capflow Streamlit app."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterable

import pandas as pd
import streamlit as st

from config import Settings
from core.models import InvalidWindowError, MinimumBalanceGranularity, ProjectionWindow


@dataclass(frozen=True)
class NavigationLink:
    slug: str
    label: str
    enabled: bool = True


NAV_LINKS: tuple[NavigationLink, ...] = (
    NavigationLink("timeline", "Cash Flow", True),
    NavigationLink("capital", "Capital", True),
    NavigationLink("planner", "Planner", True),
)


@dataclass(frozen=True)
class SidebarSelection:
    window: ProjectionWindow | None
    opening_balance: float
    granularity: MinimumBalanceGranularity


def inject_css() -> None:
    """Inject global CSS tokens and card styling into the Streamlit app."""

    st.markdown(
        """
        <style>
          :root {
            --gap: 16px;
            --radius: 12px;
            --card-bg: #FFFFFF;
            --border: #E6EAF2;
            --shadow: 0 1px 2px rgba(16, 24, 40, 0.05), 0 1px 3px rgba(16, 24, 40, 0.06);
          }

          body, [data-testid="stAppViewContainer"] > .main {
            background: #F4F6FB;
          }

          .block-container {
            max-width: 1200px;
            padding-top: 2.5rem;
            padding-bottom: 4rem;
          }

          .cf-nav {
            display: flex;
            align-items: center;
            justify-content: space-between;
            gap: 2rem;
            padding: 0.9rem 0;
          }

          .cf-nav__brand {
            font-size: 1.5rem;
            font-weight: 700;
            color: #0B3FD6;
          }

          .cf-nav__links {
            display: flex;
            align-items: center;
            gap: 1.8rem;
          }

          .cf-nav__link,
          .cf-nav__link:visited {
            font-weight: 600;
            color: #5C6478;
            text-decoration: none;
          }

          .cf-nav__link.is-active {
            color: #1D4ED8;
            border-bottom: 3px solid #1D4ED8;
          }

          .cf-card-anchor {
            display: none;
          }

          [data-testid="stVerticalBlock"]:has(> .cf-card-anchor) {
            background: var(--card-bg);
            border: 1px solid var(--border);
            border-radius: var(--radius);
            box-shadow: var(--shadow);
            padding: 16px;
            margin-bottom: var(--gap);
          }

          .cf-card__head {
            display: flex;
            align-items: center;
            justify-content: space-between;
            font-weight: 600;
            color: #111827;
          }

          .cf-chip {
            font-size: 12px;
            padding: 2px 8px;
            border-radius: 999px;
            border: 1px solid #D6DEFF;
            background: #F0F4FF;
            color: #3346FF;
          }

          .cf-insights {
            margin: 0;
            padding-left: 1.1rem;
            color: #4B5563;
          }
        </style>
        """,
        unsafe_allow_html=True,
    )


@contextmanager
def card(title: str, suffix: str | None = None):
    """Render content inside a reusable Capflow card."""

    chip_html = f'<span class="cf-chip">{suffix}</span>' if suffix else ""
    container = st.container()
    with container:
        st.markdown('<div class="cf-card-anchor"></div>', unsafe_allow_html=True)
        st.markdown(
            f'<div class="cf-card__head"><span>{title}</span>{chip_html}</div>',
            unsafe_allow_html=True,
        )
        yield


def render_navbar(active_page: str) -> None:
    """Render the dashboard navigation bar with active state."""

    link_markup: list[str] = []
    for link in NAV_LINKS:
        css_class = "cf-nav__link" + (" is-active" if link.slug == active_page else "")
        if link.enabled:
            link_markup.append(f'<a class="{css_class}" href="?page={link.slug}" target="_self">{link.label}</a>')
        else:
            link_markup.append(f'<span class="{css_class}">{link.label}</span>')

    st.markdown(
        f"""
        <nav class="cf-nav">
            <div class="cf-nav__brand">Capflow</div>
            <div class="cf-nav__links">{''.join(link_markup)}</div>
        </nav>
        """,
        unsafe_allow_html=True,
    )


def render_sidebar_filters(settings: Settings, today: pd.Timestamp | None = None) -> SidebarSelection:
    """Render window, opening balance and minimum-balance controls."""

    default_window = settings.default_window(today)
    granularities = list(MinimumBalanceGranularity)

    with st.sidebar:
        st.markdown("### Window")
        start = st.date_input("Start date", value=default_window.start.date(), key="window_start")
        end = st.date_input("End date", value=default_window.end.date(), key="window_end")

        st.markdown("### Balance")
        opening_balance = st.number_input(
            "Opening balance",
            value=float(settings.opening_balance),
            step=1000.0,
            key="opening_balance",
        )
        granularity = st.radio(
            "Minimum balance checkpoints",
            granularities,
            index=granularities.index(settings.minimum_balance_granularity),
            format_func=lambda option: "Every event" if option is MinimumBalanceGranularity.EVENT else "Month end",
            key="granularity",
        )

        try:
            window = ProjectionWindow(pd.Timestamp(start), pd.Timestamp(end))
        except InvalidWindowError as exc:
            st.error(str(exc))
            window = None

    return SidebarSelection(window=window, opening_balance=float(opening_balance), granularity=granularity)


def determine_active_page(valid_pages: Iterable[str]) -> str:
    """Determine the active page from the query params or session state."""

    params = st.query_params
    default_page = st.session_state.get("active_page", "timeline")
    raw_page = params.get("page", default_page)
    if isinstance(raw_page, list):
        raw_page = raw_page[0]

    page = raw_page if raw_page in set(valid_pages) else "timeline"

    if st.session_state.get("active_page") != page:
        st.session_state["active_page"] = page

    if params.get("page") != page:
        st.query_params["page"] = page

    return page


__all__ = [
    "NavigationLink",
    "NAV_LINKS",
    "SidebarSelection",
    "card",
    "determine_active_page",
    "inject_css",
    "render_navbar",
    "render_sidebar_filters",
]
