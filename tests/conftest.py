"""
Test fixtures and configuration for pytest
"""

import pytest


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch):
    """Auto-use guard: pin ``APP_ENV`` and clear process-wide defaults.

    Every test sees ``env == "test"`` in error reports and starts without
    defaults left behind by ``set_defaults()`` in another test.
    """
    from logfacade.config import reset_defaults

    monkeypatch.setenv("APP_ENV", "test")
    monkeypatch.delenv("LOG_FORMAT", raising=False)
    monkeypatch.delenv("SENTRY_DSN", raising=False)
    reset_defaults()
    yield
    reset_defaults()


@pytest.fixture
def memory_log():
    """A ``Log`` writing to a single in-memory transport."""
    from logfacade import Log

    return Log(transports=[{"Memory": {"level": "debug"}}], sentry={})


@pytest.fixture
def memory_transport(memory_log):
    return memory_log.transports[0]


class FakeSentryClient:
    """Stands in for ``sentry_sdk.Client``; records captured events."""

    options = None

    def __init__(self):
        self.events = []
        self.closed = False

    def capture_event(self, event, hint=None, scope=None):
        self.events.append((event, hint))
        return f"event-{len(self.events)}"

    def flush(self, timeout=None):
        pass

    def close(self):
        self.closed = True


@pytest.fixture
def fake_sentry():
    return FakeSentryClient()
