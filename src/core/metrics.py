"""
Prometheus 指标定义

- graphql_request_duration_milliseconds: 顶层请求耗时（按项目）
- graphql_root_field_total: 根字段解析次数（按项目和操作类型）
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from prometheus_client import Counter, Histogram

graphql_request_duration_milliseconds = Histogram(
    "graphql_request_duration_milliseconds",
    "GraphQL 请求耗时（毫秒）",
    ["project_id"],
    buckets=(10, 25, 50, 100, 250, 500, 1000, 2000, 5000, 10000, 30000),
)

graphql_root_field_total = Counter(
    "graphql_root_field_total",
    "GraphQL 根字段解析次数",
    ["project_id", "operation"],
)


class MetricsSink(Protocol):
    """时序指标记录器"""

    def record(self, duration_ms: float, tags: Sequence[str]) -> None: ...


class PrometheusMetricsSink:
    """将请求耗时写入 Prometheus Histogram，tags 依次对应 label"""

    def __init__(self, histogram: Histogram = graphql_request_duration_milliseconds):
        self.histogram = histogram

    def record(self, duration_ms: float, tags: Sequence[str]) -> None:
        self.histogram.labels(*tags).observe(duration_ms)


__all__ = [
    "MetricsSink",
    "PrometheusMetricsSink",
    "graphql_request_duration_milliseconds",
    "graphql_root_field_total",
]
