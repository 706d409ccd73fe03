"""Notification hub for the HR dashboard."""

__version__ = "0.1.0"
