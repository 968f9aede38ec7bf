"""Utility helpers for stache."""

from stache.utils.html import html_escape, no_escape

__all__ = ["html_escape", "no_escape"]
