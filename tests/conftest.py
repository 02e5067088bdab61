import logging

import pytest

from assetbin.config import get_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings_env(monkeypatch):
    """Apply ASSETBIN_* overrides and return the reloaded settings."""
    def apply(**env):
        for k, v in env.items():
            monkeypatch.setenv(f"ASSETBIN_{k.upper()}", str(v))
        get_settings.cache_clear()
        return get_settings()
    return apply


@pytest.fixture(autouse=True)
def reset_assetbin_logger():
    yield
    logger = logging.getLogger("assetbin")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
