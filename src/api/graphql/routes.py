"""
GraphQL HTTP 入口

- POST /graphql/{project_id}: 单个查询对象或查询数组（批量）
- GET  /graphql/health: 存活探针

传输层只负责解析请求体与查询文本；执行、错误分类与耗时上报交给 GraphQLRequestHandler。
"""

from __future__ import annotations

import time
import uuid
from collections.abc import Awaitable, Callable
from typing import Any

from fastapi import APIRouter, Body, HTTPException, Request
from fastapi.responses import JSONResponse
from graphql import GraphQLSchema, GraphQLSyntaxError, parse

from src.core.logger import logger
from src.models.graphql import GraphQLQuery, GraphQLQueryBody, GraphQLRequest, ProjectInfo
from src.services.graphql.request_handler import GraphQLRequestHandler

ProjectLoader = Callable[[str], Awaitable[tuple[ProjectInfo, GraphQLSchema] | None]]

SOURCE_HEADER = "X-GraphQL-Source"
REQUEST_ID_HEADER = "X-Request-ID"


def create_graphql_router(handler: GraphQLRequestHandler, project_loader: ProjectLoader) -> APIRouter:
    router = APIRouter(prefix="/graphql", tags=["GraphQL"])

    @router.get("/health")
    async def health() -> dict[str, str]:
        await handler.health_check()
        return {"status": "ok"}

    @router.post("/{project_id}")
    async def execute_graphql(
        project_id: str,
        http_request: Request,
        body: GraphQLQueryBody | list[GraphQLQueryBody] = Body(...),
    ) -> Any:
        """
        执行 GraphQL 查询

        请求体为数组时按批量处理，响应也是数组（顺序与请求一致）。
        """
        began_at = time.monotonic()
        request_id = http_request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())

        loaded = await project_loader(project_id)
        if loaded is None:
            raise HTTPException(status_code=404, detail=f"Project {project_id} not found")
        project, schema = loaded

        is_batch = isinstance(body, list)
        bodies = body if isinstance(body, list) else [body]
        if not bodies:
            raise HTTPException(status_code=400, detail="Empty batch")

        queries = []
        for item in bodies:
            try:
                document = parse(item.query)
            except GraphQLSyntaxError as error:
                logger.info("[{}] 查询语法错误: {}", request_id, error.message)
                return JSONResponse(status_code=400, content={"errors": [error.formatted]})
            queries.append(
                GraphQLQuery(
                    query_string=item.query,
                    document=document,
                    variables=item.variables or {},
                    operation_name=item.operation_name,
                )
            )

        request = GraphQLRequest(
            id=request_id,
            project=project,
            schema=schema,
            queries=tuple(queries),
            authorization=http_request.headers.get("Authorization"),
            ip=http_request.client.host if http_request.client else "",
            source_header=http_request.headers.get(SOURCE_HEADER),
            began_at=began_at,
            batch=is_batch,
        )
        status_code, payload = await handler.handle(request)
        return JSONResponse(
            status_code=status_code,
            content=payload,
            headers={REQUEST_ID_HEADER: request_id},
        )

    return router
