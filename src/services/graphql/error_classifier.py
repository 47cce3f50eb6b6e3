"""
错误分类器

按优先级判断失败类型，并生成返回给客户端的结构化结果：
1. CALLER_QUERY_ERROR: 查询不合法，属于调用方错误，不记录、不告警
2. EXECUTION_FAILURE: 执行引擎可格式化的错误，记录后返回格式化结果
3. UNEXPECTED_FAILURE: 其他异常，记录后返回兜底结果

QueryAnalysisError 是 ExecutionError 的子类，判断顺序不能调换。
"""

from __future__ import annotations

from enum import Enum
from typing import Any, cast

from src.core.exceptions import ExecutionError, QueryAnalysisError
from src.services.graphql.error_handler import UnhandledErrorLogger


class FailureKind(str, Enum):
    CALLER_QUERY_ERROR = "caller_query_error"
    EXECUTION_FAILURE = "execution_failure"
    UNEXPECTED_FAILURE = "unexpected_failure"

    @classmethod
    def of(cls, error: Exception) -> FailureKind:
        if isinstance(error, QueryAnalysisError):
            return cls.CALLER_QUERY_ERROR
        if isinstance(error, ExecutionError):
            return cls.EXECUTION_FAILURE
        return cls.UNEXPECTED_FAILURE


class ErrorClassifier:
    """纯分类逻辑；日志与告警由传入的 unhandled_error_logger 完成"""

    @staticmethod
    def classify(error: Exception, unhandled_error_logger: UnhandledErrorLogger) -> dict[str, Any]:
        kind = FailureKind.of(error)

        if kind is FailureKind.CALLER_QUERY_ERROR:
            return cast(QueryAnalysisError, error).resolve_error()

        if kind is FailureKind.EXECUTION_FAILURE:
            unhandled_error_logger(error)
            return cast(ExecutionError, error).resolve_error()

        if kind is FailureKind.UNEXPECTED_FAILURE:
            return unhandled_error_logger(error)

        raise AssertionError(f"unhandled failure kind: {kind}")
