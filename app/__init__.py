"""Capflow Streamlit application package."""

from .main import main

__all__ = ["main"]
