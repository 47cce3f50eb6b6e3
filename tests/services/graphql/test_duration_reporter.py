from unittest.mock import MagicMock

import pytest

from src.config import config
from src.core.exceptions import RequestTookVeryLongError
from src.services.graphql.duration_reporter import DurationReporter
from src.services.monitoring.alerts import AlertRequest
from tests.factories import make_request


def _make_reporter(enabled: bool) -> tuple[DurationReporter, MagicMock, MagicMock]:
    alert_sink = MagicMock()
    metrics_sink = MagicMock()
    reporter = DurationReporter(
        alert_sink=alert_sink,
        metrics_sink=metrics_sink,
        report_long_requests_enabled=enabled,
        threshold_ms=2000,
    )
    return reporter, alert_sink, metrics_sink


def test_slow_request_emits_alert_once(schema, project) -> None:
    request = make_request(schema, project, "{ hello }", "{ boom }", began_at=100.0)
    reporter, alert_sink, metrics_sink = _make_reporter(enabled=True)

    reporter.report(request, 102.5)

    alert_sink.report.assert_called_once()
    error, alert_request = alert_sink.report.call_args.args
    assert isinstance(error, RequestTookVeryLongError)
    assert error.duration_ms == pytest.approx(2500.0)
    assert alert_request == AlertRequest(
        request_id="req-1",
        client_id="client-1",
        project_id="proj-1",
        query="{ hello }\n{ boom }",
        variables="{}\n{}",
    )
    metrics_sink.record.assert_called_once()
    duration, tags = metrics_sink.record.call_args.args
    assert duration == pytest.approx(2500.0)
    assert tags == ["proj-1"]


def test_slow_request_with_alerting_disabled_still_records_metric(schema, project) -> None:
    request = make_request(schema, project, "{ hello }", began_at=100.0)
    reporter, alert_sink, metrics_sink = _make_reporter(enabled=False)

    reporter.report(request, 102.5)

    alert_sink.report.assert_not_called()
    metrics_sink.record.assert_called_once()


@pytest.mark.parametrize("enabled", [True, False])
def test_fast_request_never_alerts(schema, project, enabled: bool) -> None:
    request = make_request(schema, project, "{ hello }", began_at=100.0)
    reporter, alert_sink, metrics_sink = _make_reporter(enabled=enabled)

    reporter.report(request, 100.5)

    alert_sink.report.assert_not_called()
    duration, tags = metrics_sink.record.call_args.args
    assert duration == pytest.approx(500.0)
    assert tags == ["proj-1"]


def test_threshold_is_inclusive(schema, project) -> None:
    request = make_request(schema, project, "{ hello }", began_at=100.0)
    reporter, alert_sink, _ = _make_reporter(enabled=True)

    reporter.report(request, 102.0)

    alert_sink.report.assert_called_once()


def test_alert_flag_defaults_to_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, "report_long_requests_enabled", False)

    reporter = DurationReporter(alert_sink=MagicMock(), metrics_sink=MagicMock())

    assert reporter.report_long_requests_enabled is False
