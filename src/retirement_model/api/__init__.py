"""HTTP service exposing the retirement engine."""

from .app import app

__all__ = ['app']
