"""Shared pytest fixtures."""

from unittest.mock import MagicMock

import pytest

from boundform.config import Settings, get_settings


@pytest.fixture(autouse=True)
def clear_settings_cache(monkeypatch, tmp_path):
    """Keep settings independent of the developer's environment."""
    monkeypatch.setenv("BOUNDFORM_CONFIG", str(tmp_path / "missing.yaml"))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def mock_request_factory():
    """Factory fixture that returns mock requests with a session dict."""
    def _make(session=None, form_data=None):
        request = MagicMock()
        request.session = session if session is not None else {}
        if form_data is not None:
            async def _form():
                return form_data
            request.form = _form
        return request
    return _make
