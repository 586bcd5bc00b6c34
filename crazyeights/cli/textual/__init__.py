"""Textual front-end for Crazy Eights."""

from .app import run_textual_app

__all__ = ["run_textual_app"]
