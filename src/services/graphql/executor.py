"""
查询执行引擎

Executor 是调度器依赖的执行接口；GraphQLCoreExecutor 基于 graphql-core 实现：
1. validate 失败 -> QueryAnalysisError（调用方错误）
2. 执行前失败（变量类型不匹配、找不到操作）-> QueryAnalysisError
3. 引擎直接抛出的 GraphQLError -> ExecutionError
4. 其余情况返回格式化后的结果，result.errors 逐条交给 error_handler
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol

from graphql import DocumentNode, ExecutionResult, GraphQLError, GraphQLSchema, execute, validate
from graphql.pyutils import is_awaitable

from src.core.exceptions import ExecutionError, QueryAnalysisError
from src.services.graphql.error_handler import ErrorHook


class Executor(Protocol):
    async def execute(
        self,
        schema: GraphQLSchema,
        document: DocumentNode,
        context: Any,
        variables: dict[str, Any],
        error_handler: ErrorHook,
        operation_name: str | None,
        deferred_resolver: Any,
        middlewares: Sequence[Any],
    ) -> dict[str, Any]: ...


class GraphQLCoreExecutor:
    async def execute(
        self,
        schema: GraphQLSchema,
        document: DocumentNode,
        context: Any,
        variables: dict[str, Any],
        error_handler: ErrorHook,
        operation_name: str | None,
        deferred_resolver: Any,
        middlewares: Sequence[Any],
    ) -> dict[str, Any]:
        validation_errors = validate(schema, document)
        if validation_errors:
            raise QueryAnalysisError(validation_errors)

        # resolver 通过 info.context.deferred_resolver 访问跨查询的延迟加载器
        if deferred_resolver is not None:
            context.deferred_resolver = deferred_resolver

        try:
            result = execute(
                schema,
                document,
                context_value=context,
                variable_values=variables,
                operation_name=operation_name,
                middleware=list(middlewares),
            )
            if is_awaitable(result):
                result = await result
        except GraphQLError as error:
            raise ExecutionError([error]) from error

        return self._format_result(result, error_handler)

    @staticmethod
    def _format_result(result: ExecutionResult, error_handler: ErrorHook) -> dict[str, Any]:
        errors = result.errors or []
        if result.data is None and errors and all(error.path is None for error in errors):
            raise QueryAnalysisError(errors)

        payload: dict[str, Any] = {"data": result.data}
        if errors:
            payload["errors"] = [error_handler(error) for error in errors]
        if result.extensions:
            payload["extensions"] = result.extensions
        return payload
