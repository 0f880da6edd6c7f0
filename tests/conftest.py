import pytest

from videotimecode import config


@pytest.fixture(autouse=True)
def restore_default_config():
    """Put the process wide defaults back after every test."""
    previous = config.get_default_config()
    yield
    config.set_default_config(previous)
