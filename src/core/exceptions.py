"""
GraphQL 网关异常定义

分类:
- QueryAnalysisError: 查询本身不合法（校验失败、变量不匹配），属于调用方错误
- ExecutionError: 执行过程中出现、且执行引擎能够格式化的错误
- UserFacingError: 在 resolver 中主动抛出、可直接展示给用户的错误
"""

from __future__ import annotations

from typing import Any

from graphql import GraphQLError

from src.config.constants import ErrorMessages


class GraphQLGatewayError(Exception):
    """网关异常基类"""


class ExecutionError(GraphQLGatewayError):
    """执行引擎可以自行格式化的错误"""

    def __init__(self, errors: list[GraphQLError], message: str | None = None):
        self.errors = list(errors)
        self.message = message or (self.errors[0].message if self.errors else "Execution failed")
        super().__init__(self.message)

    def resolve_error(self) -> dict[str, Any]:
        """转换为返回给客户端的结构化结果"""
        return {"data": None, "errors": [error.formatted for error in self.errors]}


class QueryAnalysisError(ExecutionError):
    """查询在执行前被判定为无效（相对于 schema）"""

    def resolve_error(self) -> dict[str, Any]:
        # 执行前失败，没有 data 字段
        return {"errors": [error.formatted for error in self.errors]}


class UserFacingError(GraphQLGatewayError):
    """可直接返回给用户的错误，不作为故障记录"""

    code: int = 3000

    def __init__(self, message: str, code: int | None = None):
        self.message = message
        if code is not None:
            self.code = code
        super().__init__(message)


class ProjectLockdownError(UserFacingError):
    """项目处于锁定状态，禁止写操作"""

    code = 3051

    def __init__(self, project_id: str):
        self.project_id = project_id
        super().__init__(ErrorMessages.PROJECT_LOCKED)


class RequestTookVeryLongError(GraphQLGatewayError):
    """请求耗时超过阈值，仅用于告警上报"""

    def __init__(self, duration_ms: float):
        self.duration_ms = duration_ms
        super().__init__(f"Request took very long: {duration_ms:.0f}ms")
