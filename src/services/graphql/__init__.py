"""
GraphQL 请求处理模块

- GraphQLRequestHandler: 请求入口，调度后上报耗时
- QueryDispatcher: 单个/批量查询的执行与结果合并
- ErrorClassifier: 执行失败的分类与兜底
- DurationReporter: 慢请求告警与耗时指标
"""

from .context import ExecutionContext, FeatureMetric
from .dispatcher import QueryDispatcher
from .duration_reporter import DurationReporter
from .error_classifier import ErrorClassifier, FailureKind
from .error_handler import ErrorHandlerFactory
from .executor import Executor, GraphQLCoreExecutor
from .request_handler import GraphQLRequestHandler, create_request_handler

__all__ = [
    "DurationReporter",
    "ErrorClassifier",
    "ErrorHandlerFactory",
    "ExecutionContext",
    "Executor",
    "FailureKind",
    "FeatureMetric",
    "GraphQLCoreExecutor",
    "GraphQLRequestHandler",
    "QueryDispatcher",
    "create_request_handler",
]
