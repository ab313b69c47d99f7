"""
Command-line interface for the booking client.
"""

from .app import app

__all__ = ["app"]
