"""
GraphQL 请求处理入口

调度查询 -> 上报耗时 -> 返回 (200, payload)。
错误已在调度阶段转换为 payload 内容，本层不产生非 200 状态码。
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any

from src.config import config
from src.core.metrics import MetricsSink
from src.models.graphql import GraphQLRequest
from src.services.graphql.context import FeatureMetric
from src.services.graphql.dispatcher import QueryDispatcher
from src.services.graphql.duration_reporter import DurationReporter
from src.services.graphql.error_handler import ErrorHandlerFactory
from src.services.monitoring.alerts import AlertSink

HTTP_OK = 200


class GraphQLRequestHandler:
    def __init__(
        self,
        dispatcher: QueryDispatcher,
        duration_reporter: DurationReporter,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.dispatcher = dispatcher
        self.duration_reporter = duration_reporter
        self.clock = clock

    async def handle(self, request: GraphQLRequest) -> tuple[int, dict[str, Any] | list[dict[str, Any]]]:
        payload = await self.dispatcher.dispatch(request)
        self.duration_reporter.report(request, self.clock())
        return HTTP_OK, payload

    async def health_check(self) -> None:
        """存活探针，不做任何实际检查"""
        return None


def create_request_handler(
    alert_sink: AlertSink | None = None,
    metrics_sink: MetricsSink | None = None,
    deferred_resolver: Any = None,
) -> GraphQLRequestHandler:
    """按全局配置组装默认的请求处理器"""
    dispatcher = QueryDispatcher(
        error_handler_factory=ErrorHandlerFactory(alert_sink),
        api_feature=FeatureMetric(config.api_feature),
        deferred_resolver=deferred_resolver,
    )
    reporter = DurationReporter(alert_sink=alert_sink, metrics_sink=metrics_sink)
    return GraphQLRequestHandler(dispatcher, reporter)
