"""
查询调度器

- 单个查询：直接返回执行结果
- 批量查询：并发执行，结果按请求顺序返回；单个查询失败不影响其他查询
"""

from __future__ import annotations

import asyncio
from typing import Any

from src.config import config
from src.core.logger import logger
from src.models.graphql import GraphQLQuery, GraphQLRequest
from src.services.graphql.context import ExecutionContext, FeatureMetric
from src.services.graphql.error_classifier import ErrorClassifier
from src.services.graphql.error_handler import ErrorHandlerFactory
from src.services.graphql.executor import Executor, GraphQLCoreExecutor
from src.services.graphql.middleware import ApiMetricsMiddleware, ProjectLockdownMiddleware


class QueryDispatcher:
    def __init__(
        self,
        error_handler_factory: ErrorHandlerFactory,
        api_feature: FeatureMetric,
        api_metrics_middleware: ApiMetricsMiddleware | None = None,
        deferred_resolver: Any = None,
        executor: Executor | None = None,
        max_concurrency: int | None = None,
    ):
        self.error_handler_factory = error_handler_factory
        self.api_feature = api_feature
        self.api_metrics_middleware = api_metrics_middleware or ApiMetricsMiddleware()
        self.deferred_resolver = deferred_resolver
        self.executor = executor or GraphQLCoreExecutor()
        self.max_concurrency = (
            config.batch_max_concurrency if max_concurrency is None else max_concurrency
        )

    async def dispatch(self, request: GraphQLRequest) -> dict[str, Any] | list[dict[str, Any]]:
        if not request.is_batch:
            return await self.handle_query(request, request.queries[0])

        if self.max_concurrency > 0:
            semaphore = asyncio.Semaphore(self.max_concurrency)

            async def _bounded(query: GraphQLQuery) -> dict[str, Any]:
                async with semaphore:
                    return await self.handle_query(request, query)

            tasks = [_bounded(query) for query in request.queries]
        else:
            tasks = [self.handle_query(request, query) for query in request.queries]

        # gather 按传入顺序返回结果，与完成顺序无关
        return list(await asyncio.gather(*tasks))

    async def handle_query(self, request: GraphQLRequest, query: GraphQLQuery) -> dict[str, Any]:
        error_hook, unhandled_error_logger = self.error_handler_factory.handlers(
            request_id=request.id,
            query=query.query_string,
            variables=query.variables,
            client_id=request.project.client_id,
            project_id=request.project.id,
        )

        logger.info("[{}] 查询: {} | 变量: {}", request.id, query.query_string, query.variables_json())

        try:
            context = ExecutionContext.from_request(request, query)
            context.add_feature_metric(self.api_feature)
            context.source_header = request.source_header

            return await self.executor.execute(
                schema=request.schema,
                document=query.document,
                context=context,
                variables=query.variables,
                error_handler=error_hook,
                operation_name=query.operation_name,
                deferred_resolver=self.deferred_resolver,
                middlewares=[self.api_metrics_middleware, ProjectLockdownMiddleware(request.project)],
            )
        except Exception as error:
            return ErrorClassifier.classify(error, unhandled_error_logger)
