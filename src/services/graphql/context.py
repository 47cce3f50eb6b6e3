"""
查询执行上下文

每个查询执行时都会新建一个 ExecutionContext，批量请求中的各个查询互不共享。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from graphql import DocumentNode

from src.models.graphql import GraphQLQuery, GraphQLRequest


class FeatureMetric(str, Enum):
    """记录请求由哪个 API 入口处理"""

    SIMPLE_API = "simple_api"
    RELAY_API = "relay_api"
    SUBSCRIPTIONS = "subscriptions"


@dataclass
class ExecutionContext:
    request_id: str
    client_id: str
    project_id: str
    request_ip: str = ""
    authorization: str | None = None
    query_ast: DocumentNode | None = None
    source_header: str | None = None
    deferred_resolver: Any = None
    feature_metrics: set[FeatureMetric] = field(default_factory=set)

    @classmethod
    def from_request(
        cls,
        request: GraphQLRequest,
        query: GraphQLQuery,
    ) -> ExecutionContext:
        return cls(
            request_id=request.id,
            client_id=request.project.client_id,
            project_id=request.project.id,
            request_ip=request.ip,
            authorization=request.authorization,
            query_ast=query.document,
        )

    def add_feature_metric(self, metric: FeatureMetric) -> None:
        self.feature_metrics.add(metric)
