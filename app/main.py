"""Capflow dashboard entrypoint."""

from __future__ import annotations

import asyncio

import streamlit as st

from app.layout import (
    NAV_LINKS,
    SidebarSelection,
    determine_active_page,
    inject_css,
    render_navbar,
    render_sidebar_filters,
)
from app.pages import render_capital_page, render_planner_page, render_timeline_page
from config import Settings, configure_logging, get_logger, get_settings
from core import JsonRecordStore, ProjectionResult, ProjectionSession


st.set_page_config(
    page_title="Capflow | Cash Flow",
    page_icon="💼",
    layout="wide",
    initial_sidebar_state="expanded",
)

logger = get_logger(__name__)

_PAGES = {
    "timeline": render_timeline_page,
    "capital": render_capital_page,
    "planner": render_planner_page,
}


def _session() -> ProjectionSession:
    if "projection_session" not in st.session_state:
        st.session_state["projection_session"] = ProjectionSession()
    return st.session_state["projection_session"]


def _recompute(settings: Settings, selection: SidebarSelection) -> ProjectionResult | None:
    context = settings.build_context(
        selection.window,
        opening_balance=selection.opening_balance,
        granularity=selection.granularity,
    )
    session = _session()
    store = JsonRecordStore(settings.data_path)
    asyncio.run(session.refresh(store, context))
    return session.result


def main() -> None:
    """Application entrypoint for the Capflow dashboard."""

    settings = get_settings()
    configure_logging(level=settings.log_level)

    inject_css()
    valid_pages = [link.slug for link in NAV_LINKS if link.enabled]
    active_page = determine_active_page(valid_pages)
    render_navbar(active_page)

    selection = render_sidebar_filters(settings)
    if selection.window is None:
        st.info("Choose a start date before the end date to project cash flow.")
        return

    try:
        result = _recompute(settings, selection)
    except FileNotFoundError as exc:
        logger.error("Record file missing: %s", exc)
        st.error(f"No records available: {exc}")
        return

    if result is None:
        st.warning("Projection is still updating. Refresh to load the latest figures.")
        return

    _PAGES.get(active_page, render_timeline_page)(result, settings.currency_symbol)


if __name__ == "__main__":
    main()
