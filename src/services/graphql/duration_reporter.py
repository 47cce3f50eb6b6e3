"""
请求耗时上报

每个顶层请求调用一次（批量请求也只调用一次）：
- 耗时超过阈值且告警开关打开时，上报 RequestTookVeryLongError
- 无论是否超时，都记录耗时指标（按项目）
"""

from __future__ import annotations

from src.config import config
from src.core.exceptions import RequestTookVeryLongError
from src.core.logger import logger
from src.core.metrics import MetricsSink, PrometheusMetricsSink
from src.models.graphql import GraphQLRequest
from src.services.monitoring.alerts import AlertRequest, AlertSink, LoggingAlertSink


class DurationReporter:
    def __init__(
        self,
        alert_sink: AlertSink | None = None,
        metrics_sink: MetricsSink | None = None,
        report_long_requests_enabled: bool | None = None,
        threshold_ms: int | None = None,
    ):
        self.alert_sink = alert_sink or LoggingAlertSink()
        self.metrics_sink = metrics_sink or PrometheusMetricsSink()
        self.report_long_requests_enabled = (
            config.report_long_requests_enabled
            if report_long_requests_enabled is None
            else report_long_requests_enabled
        )
        self.threshold_ms = config.slow_request_threshold_ms if threshold_ms is None else threshold_ms

    def report(self, request: GraphQLRequest, completed_at: float) -> None:
        """
        Args:
            request: 已处理完成的请求
            completed_at: 完成时间，与 request.began_at 同为单调时钟秒数
        """
        duration_ms = (completed_at - request.began_at) * 1000

        if duration_ms >= self.threshold_ms and self.report_long_requests_enabled:
            logger.warning(
                "[{}] 请求耗时过长: {:.0f}ms, project={}",
                request.id,
                duration_ms,
                request.project.id,
            )
            alert_request = AlertRequest(
                request_id=request.id,
                client_id=request.project.client_id,
                project_id=request.project.id,
                query="\n".join(query.query_string for query in request.queries),
                variables="\n".join(query.variables_json() for query in request.queries),
            )
            self.alert_sink.report(RequestTookVeryLongError(duration_ms), alert_request)

        self.metrics_sink.record(duration_ms, [request.project.id])
