import logging

import pytest

from sided_ioc.constants import LOGGER, SIDE_ENV_VAR

log_capture: list[str] = []


class ListLogHandler(logging.Handler):
    def emit(self, record):
        log_capture.append(self.format(record))


@pytest.fixture(autouse=True)
def reset_logging_capture():
    log_capture.clear()
    handler = ListLogHandler()
    previous = LOGGER.level
    LOGGER.addHandler(handler)
    LOGGER.setLevel(logging.DEBUG)
    yield
    LOGGER.removeHandler(handler)
    LOGGER.setLevel(previous)


@pytest.fixture(autouse=True)
def clean_side_env(monkeypatch):
    monkeypatch.delenv(SIDE_ENV_VAR, raising=False)


class DictResolver:
    """Minimal service resolver over a dict, counting lookups."""

    def __init__(self, services=None):
        self.services = dict(services or {})
        self.lookups: list = []

    def get_service(self, key):
        self.lookups.append(key)
        return self.services.get(key)


@pytest.fixture
def resolver():
    return DictResolver()
