"""Headless, frame-stepped side-scrolling shooter: players, enemy waves, pools and a text window."""

__version__ = "0.1.0"