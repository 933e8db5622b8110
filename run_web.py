#!/usr/bin/env python3
"""
Main entry point for the SkateTrack web dashboard.

This script launches the Flask-based web server. Branding preferences are
kept in branding.json next to this script.
"""
import os

from skatetrack.services import JsonFileKeyValueStore
from skatetrack.ui.web_app import run_web_app

if __name__ == "__main__":
    project_root = os.path.dirname(os.path.abspath(__file__))
    store = JsonFileKeyValueStore(os.path.join(project_root, "branding.json"))
    run_web_app(branding_store=store)
