"""Pytest configuration and fixtures for stache tests."""

import pytest

from stache import DictLoader, Environment


@pytest.fixture
def env():
    """Create a default (lenient, HTML-escaping) Environment."""
    return Environment()


@pytest.fixture
def strict_env():
    """Create an Environment that raises on missing variables."""
    return Environment(strict=True)


@pytest.fixture
def env_with_loader():
    """Create an Environment with a DictLoader of test partials."""
    loader = DictLoader(
        {
            "user": "<b>{{name}}</b>",
            "list": "{{#items}}\n- {{.}}\n{{/items}}\n",
            "greeting": "Hello {{name}}!",
            "nested": "[{{>greeting}}]",
            "self": "{{>self}}",
            "broken": "{{#open}}",
        }
    )
    return Environment(loader=loader)
