"""
Pytest configuration and fixtures for the metatags test suite.
"""
import os
from dataclasses import dataclass, field
from typing import Any, Callable, Generator

import pytest
from starlette.requests import Request

from metatags.internal.env_settings import Settings, get_settings
from metatags.internal.i18n import Translator, get_translator, translator_for
from metatags.internal.registry import registry
from metatags.internal.resolver import flush_resolution_cache


@dataclass
class FakeViewContext:
    """Minimal ViewContext for provider tests that need no request."""

    original_url: str = "https://devpost.test/software/widget?ref=home"
    locale: str = "en"
    controller_name: str | None = None
    settings: Settings = field(default_factory=Settings)

    def image_url(self, path: str) -> str:
        return f"https://cdn.devpost.test/assets/{path}"


# Global state fixtures
@pytest.fixture(autouse=True)
def restore_registry() -> Generator[None, None, None]:
    """Providers defined inside a test are unregistered afterwards."""
    saved = registry.providers()
    yield
    registry.replace(saved)
    flush_resolution_cache()


@pytest.fixture(autouse=True)
def reset_settings(monkeypatch, tmp_path) -> Generator[None, None, None]:
    """Run every test with default settings, from an empty working directory."""
    monkeypatch.chdir(tmp_path)
    for name in list(os.environ):
        if name.startswith("METATAGS_"):
            monkeypatch.delenv(name)
    get_settings.cache_clear()
    translator_for.cache_clear()
    yield
    get_settings.cache_clear()
    translator_for.cache_clear()


@pytest.fixture
def translator() -> Translator:
    """The process-wide translator, preloaded with the base catalog."""
    translator = get_translator()
    translator.store(
        "en",
        {
            "meta_tags": {
                "base": {
                    "title": "Devpost - The home for hackathons",
                    "description": "Participate in online hackathons.",
                },
            }
        },
    )
    return translator


@pytest.fixture
def view_context() -> FakeViewContext:
    return FakeViewContext()


@pytest.fixture
def make_view_context() -> Callable[..., FakeViewContext]:
    return FakeViewContext


@pytest.fixture
def make_request() -> Callable[..., Request]:
    """Factory for bare Starlette requests built without an app."""

    def _make_request(
        path: str = "/",
        query_string: bytes = b"",
        endpoint: Any = None,
        app: Any = None,
    ) -> Request:
        scope: dict[str, Any] = {
            "type": "http",
            "method": "GET",
            "scheme": "https",
            "server": ("devpost.test", 443),
            "root_path": "",
            "path": path,
            "query_string": query_string,
            "headers": [(b"host", b"devpost.test")],
        }
        if endpoint is not None:
            scope["endpoint"] = endpoint
        if app is not None:
            scope["app"] = app
            scope["router"] = app.router
        return Request(scope)

    return _make_request
