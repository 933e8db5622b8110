"""
UI package for the SkateTrack dashboard.

This package contains the Flask server behind the dashboard pages.
"""
from .web_app import create_app, run_web_app, WebAppState

__all__ = ["create_app", "run_web_app", "WebAppState"]
