"""Internship activity tracker: daily work entries, dashboard and reports."""

from tracker.app import create_app

__all__ = ["create_app"]
