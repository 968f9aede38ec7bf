"""Stache Template package: compiled templates and the renderer."""

from stache.template.core import Template, Writable
from stache.template.renderer import Renderer
from stache.template.source import body_source

__all__ = [
    "Renderer",
    "Template",
    "Writable",
    "body_source",
]
