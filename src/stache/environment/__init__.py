"""Stache environment: configuration, loaders and the error catalog."""

from stache.environment.exceptions import (
    ErrorCode,
    InvalidVariableError,
    MissingVariableError,
    PartialDepthError,
    SourceSnippet,
    TemplateError,
    TemplateNotFoundError,
    TemplateRuntimeError,
    TemplateSyntaxError,
    build_source_snippet,
)
from stache.environment.loaders import (
    ChoiceLoader,
    DictLoader,
    FileSystemLoader,
    FunctionLoader,
    Loader,
)
from stache.environment.core import Environment  # noqa: I001

__all__ = [
    "ChoiceLoader",
    "DictLoader",
    "Environment",
    "ErrorCode",
    "FileSystemLoader",
    "FunctionLoader",
    "InvalidVariableError",
    "Loader",
    "MissingVariableError",
    "PartialDepthError",
    "SourceSnippet",
    "TemplateError",
    "TemplateNotFoundError",
    "TemplateRuntimeError",
    "TemplateSyntaxError",
    "build_source_snippet",
]
