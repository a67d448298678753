"""Shared fixtures."""

import pytest

from miniprof_import.utils.config import Config, set_config


@pytest.fixture(autouse=True)
def default_config():
    """Run every test with default configuration, independent of the environment."""
    config = Config(show_progress=False)
    set_config(config)
    yield config
    set_config(None)
