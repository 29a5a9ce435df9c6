"""Web application entry point for Surat AI."""

from .app import create_app

__all__ = ["create_app"]
