"""Surat AI: AI-assisted intake and archive of official letters."""

__version__ = "0.1.0"
