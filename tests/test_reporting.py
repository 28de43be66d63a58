"""Tests for Sentry error reporting."""

from unittest.mock import patch

import pytest

from logfacade.partition import partition
from logfacade.reporting import ErrorReporter


class _ErrorLike:
    message = "upstream timed out"
    stack = "at fetch (client.js:10)"


class TestErrorReporter:
    def test_disabled_without_dsn(self):
        reporter = ErrorReporter(None)
        assert not reporter.enabled
        assert reporter.capture_exception(ValueError("x"), partition()) is None
        reporter.flush()
        reporter.close()

    def test_disabled_with_false_dsn(self):
        assert not ErrorReporter(False, {"release": "1"}).enabled

    def test_builds_client_from_dsn(self):
        with patch("logfacade.reporting.sentry_sdk.Client") as client_cls:
            reporter = ErrorReporter("https://public@example.com/1", {"release": "1.0"})

        assert reporter.enabled
        client_cls.assert_called_once_with(
            "https://public@example.com/1",
            release="1.0",
            environment="test",
            default_integrations=False,
        )

    def test_explicit_environment_option_wins(self):
        with patch("logfacade.reporting.sentry_sdk.Client") as client_cls:
            ErrorReporter("https://public@example.com/1", {"environment": "prod"})
        assert client_cls.call_args[1]["environment"] == "prod"

    def test_default_integrations_can_be_enabled(self):
        with patch("logfacade.reporting.sentry_sdk.Client") as client_cls:
            ErrorReporter("https://public@example.com/1", {"default_integrations": True})
        assert client_cls.call_args[1]["default_integrations"] is True

    def test_captures_exception_with_payload(self, fake_sentry):
        reporter = ErrorReporter(client=fake_sentry)
        try:
            raise ValueError("bad input")
        except ValueError as exc:
            event_id = reporter.capture_exception(
                exc,
                partition(
                    {
                        "tags": {"team": "core"},
                        "fingerprint": "checkout-failure",
                        "level": "crit",
                        "order_id": 12,
                    }
                ),
            )

        assert event_id == "event-1"
        event, hint = fake_sentry.events[0]
        assert event["exception"]["values"][-1]["type"] == "ValueError"
        assert event["tags"] == {"team": "core", "env": "test"}
        assert event["extra"]["order_id"] == 12
        assert event["fingerprint"] == ["checkout-failure"]
        assert event["level"] == "fatal"
        assert hint["exc_info"][0] is ValueError

    def test_default_payload(self, fake_sentry):
        ErrorReporter(client=fake_sentry).capture_exception(RuntimeError("x"))
        event, _ = fake_sentry.events[0]
        assert event["tags"] == {"env": "test"}
        assert "fingerprint" not in event

    @pytest.mark.parametrize(
        "fingerprint, expected",
        [(42, ["42"]), (("checkout", 7), ["checkout", "7"]), (b"raw", ["raw"])],
    )
    def test_fingerprint_becomes_list_of_strings(self, fake_sentry, fingerprint, expected):
        ErrorReporter(client=fake_sentry).capture_exception(
            ValueError("x"), partition({"fingerprint": fingerprint})
        )
        assert fake_sentry.events[0][0]["fingerprint"] == expected

    def test_sentry_level_passthrough(self, fake_sentry):
        ErrorReporter(client=fake_sentry).capture_exception(
            RuntimeError("x"), partition({"level": "warning"})
        )
        assert fake_sentry.events[0][0]["level"] == "warning"

    def test_error_like_object(self, fake_sentry):
        ErrorReporter(client=fake_sentry).capture_exception(_ErrorLike(), partition({"k": "v"}))

        event, hint = fake_sentry.events[0]
        assert event["message"] == "upstream timed out"
        assert event["extra"] == {"stack": "at fetch (client.js:10)", "k": "v"}
        assert hint is None

    def test_close(self, fake_sentry):
        ErrorReporter(client=fake_sentry).close()
        assert fake_sentry.closed
