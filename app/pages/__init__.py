"""Page modules for the Capflow Streamlit application."""

from .capital import render_page as render_capital_page
from .planner import render_page as render_planner_page
from .timeline import render_page as render_timeline_page

__all__ = [
    "render_capital_page",
    "render_planner_page",
    "render_timeline_page",
]
