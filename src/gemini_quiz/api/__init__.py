"""HTTP surface for the quiz generator."""

from .app import create_app

__all__ = ["create_app"]
