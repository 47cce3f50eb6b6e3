from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from graphql import GraphQLError
from prometheus_client import CollectorRegistry, Counter

from src.config.constants import ErrorMessages
from src.core.exceptions import ExecutionError, QueryAnalysisError
from src.models.graphql import ProjectInfo
from src.services.graphql.context import ExecutionContext
from src.services.graphql.executor import GraphQLCoreExecutor
from src.services.graphql.middleware import ApiMetricsMiddleware, ProjectLockdownMiddleware
from tests.factories import make_query


def _context() -> ExecutionContext:
    return ExecutionContext(request_id="req-1", client_id="client-1", project_id="proj-1")


async def _run(schema, query_string: str, *, variables=None, error_handler=None, middlewares=(), deferred=None, context=None):
    query = make_query(query_string, variables)
    return await GraphQLCoreExecutor().execute(
        schema=schema,
        document=query.document,
        context=context or _context(),
        variables=query.variables,
        error_handler=error_handler or (lambda error: error.formatted),
        operation_name=query.operation_name,
        deferred_resolver=deferred,
        middlewares=list(middlewares),
    )


@pytest.mark.asyncio
async def test_successful_query_returns_data(schema) -> None:
    result = await _run(schema, '{ hello(name: "gateway") slow(delay: 0) }')

    assert result == {"data": {"hello": "hello gateway", "slow": 0.0}}


@pytest.mark.asyncio
async def test_invalid_field_raises_query_analysis_error(schema) -> None:
    with pytest.raises(QueryAnalysisError) as exc_info:
        await _run(schema, "{ doesNotExist }")

    payload = exc_info.value.resolve_error()
    assert "doesNotExist" in payload["errors"][0]["message"]


@pytest.mark.asyncio
async def test_missing_variable_raises_query_analysis_error(schema) -> None:
    with pytest.raises(QueryAnalysisError):
        await _run(schema, "query ($name: String!) { hello(name: $name) }", variables={})


@pytest.mark.asyncio
async def test_resolver_errors_go_through_error_handler(schema) -> None:
    error_handler = MagicMock(return_value={"message": "handled"})

    result = await _run(schema, "{ hello boom }", error_handler=error_handler)

    assert result["data"] == {"hello": "hello world", "boom": None}
    assert result["errors"] == [{"message": "handled"}]
    (error,), _ = error_handler.call_args
    assert isinstance(error, GraphQLError)
    assert isinstance(error.original_error, RuntimeError)


@pytest.mark.asyncio
async def test_engine_graphql_error_becomes_execution_error(schema, monkeypatch: pytest.MonkeyPatch) -> None:
    def _raise(*_args, **_kwargs):
        raise GraphQLError("engine failure")

    monkeypatch.setattr("src.services.graphql.executor.execute", _raise)

    with pytest.raises(ExecutionError) as exc_info:
        await _run(schema, "{ hello }")

    assert not isinstance(exc_info.value, QueryAnalysisError)
    assert exc_info.value.resolve_error() == {"data": None, "errors": [{"message": "engine failure"}]}


@pytest.mark.asyncio
async def test_deferred_resolver_is_exposed_on_context(schema) -> None:
    deferred = SimpleNamespace(get=lambda key: f"deferred:{key}")

    result = await _run(schema, '{ deferred(key: "a") }', deferred=deferred)

    assert result == {"data": {"deferred": "deferred:a"}}


@pytest.mark.asyncio
async def test_lockdown_blocks_mutations(schema) -> None:
    locked = ProjectInfo(id="proj-1", client_id="client-1", allow_mutations=False)

    result = await _run(
        schema,
        'mutation { createItem(name: "x") }',
        middlewares=[ProjectLockdownMiddleware(locked)],
    )

    assert result["data"] == {"createItem": None}
    assert result["errors"][0]["message"] == ErrorMessages.PROJECT_LOCKED


@pytest.mark.asyncio
async def test_lockdown_allows_queries(schema) -> None:
    locked = ProjectInfo(id="proj-1", client_id="client-1", allow_mutations=False)

    result = await _run(schema, "{ hello }", middlewares=[ProjectLockdownMiddleware(locked)])

    assert result == {"data": {"hello": "hello world"}}


@pytest.mark.asyncio
async def test_api_metrics_counts_root_fields(schema) -> None:
    registry = CollectorRegistry()
    counter = Counter("test_root_field", "root fields", ["project_id", "operation"], registry=registry)

    await _run(schema, '{ hello source features }', middlewares=[ApiMetricsMiddleware(counter)])
    await _run(schema, 'mutation { createItem(name: "x") }', middlewares=[ApiMetricsMiddleware(counter)])

    assert registry.get_sample_value("test_root_field_total", {"project_id": "proj-1", "operation": "query"}) == 3.0
    assert registry.get_sample_value("test_root_field_total", {"project_id": "proj-1", "operation": "mutation"}) == 1.0
