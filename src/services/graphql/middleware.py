"""
graphql-core 中间件

- ApiMetricsMiddleware: 统计根字段解析次数（进程内共享一个实例）
- ProjectLockdownMiddleware: 每个请求按目标项目创建，锁定项目禁止 mutation
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from graphql import GraphQLResolveInfo, OperationType
from prometheus_client import Counter

from src.core.exceptions import ProjectLockdownError
from src.core.metrics import graphql_root_field_total
from src.models.graphql import ProjectInfo


def _is_root_field(info: GraphQLResolveInfo) -> bool:
    return info.path.prev is None


class ApiMetricsMiddleware:
    def __init__(self, counter: Counter = graphql_root_field_total):
        self.counter = counter

    def resolve(self, next_: Callable[..., Any], root: Any, info: GraphQLResolveInfo, **args: Any) -> Any:
        if _is_root_field(info):
            project_id = getattr(info.context, "project_id", None) or "unknown"
            self.counter.labels(project_id, info.operation.operation.value).inc()
        return next_(root, info, **args)


class ProjectLockdownMiddleware:
    def __init__(self, project: ProjectInfo):
        self.project = project

    def resolve(self, next_: Callable[..., Any], root: Any, info: GraphQLResolveInfo, **args: Any) -> Any:
        if (
            not self.project.allow_mutations
            and _is_root_field(info)
            and info.operation.operation == OperationType.MUTATION
        ):
            raise ProjectLockdownError(self.project.id)
        return next_(root, info, **args)
