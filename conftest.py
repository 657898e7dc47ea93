"""Shared pytest configuration for tfizz."""

import pytest
from tfizz.config.settings import appsettings


@pytest.fixture(autouse=True)
def quiet_logging():
    """Keep debug logging out of test output."""
    previous: bool = appsettings.beQuiet
    appsettings.beQuiet = True
    yield
    appsettings.beQuiet = previous
