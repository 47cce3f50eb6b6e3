"""
GraphQL 请求相关的数据模型

- GraphQLQuery / GraphQLRequest: 在传输层创建，请求生命周期内不可变
- GraphQLQueryBody: HTTP 请求体（pydantic 校验）
"""

from __future__ import annotations

import json
import time
from dataclasses import dataclass, field
from typing import Any

from graphql import DocumentNode, GraphQLSchema
from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class GraphQLQuery:
    query_string: str
    document: DocumentNode
    variables: dict[str, Any] = field(default_factory=dict)
    operation_name: str | None = None

    def variables_json(self) -> str:
        return json.dumps(self.variables, ensure_ascii=False, default=str)


@dataclass(frozen=True)
class ProjectInfo:
    """目标项目信息"""

    id: str
    client_id: str  # 项目所属租户
    name: str = ""
    allow_mutations: bool = True  # False 时项目处于锁定状态


@dataclass(frozen=True)
class GraphQLRequest:
    id: str
    project: ProjectInfo
    schema: GraphQLSchema
    queries: tuple[GraphQLQuery, ...]
    authorization: str | None = None
    ip: str = ""
    source_header: str | None = None
    # 单调时钟（秒），与 time.monotonic() 同源
    began_at: float = field(default_factory=time.monotonic)
    # 请求体是否为数组；未指定时按查询数量判断
    batch: bool | None = None

    def __post_init__(self) -> None:
        if not self.queries:
            raise ValueError("GraphQLRequest requires at least one query")
        # 允许传入 list，统一转为 tuple 保证不可变
        object.__setattr__(self, "queries", tuple(self.queries))

    @property
    def is_batch(self) -> bool:
        if self.batch is not None:
            return self.batch
        return len(self.queries) > 1


class GraphQLQueryBody(BaseModel):
    """单个查询的 HTTP 请求体"""

    model_config = ConfigDict(populate_by_name=True)

    query: str = Field(..., description="GraphQL 查询文本")
    variables: dict[str, Any] | None = Field(None, description="查询变量")
    operation_name: str | None = Field(None, alias="operationName", description="操作名")
