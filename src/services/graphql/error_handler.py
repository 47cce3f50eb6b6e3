"""
错误处理器工厂

为每个查询生成一对处理函数：
- error_hook: 执行引擎在格式化 result.errors 时调用
- unhandled_error_logger: 记录未处理异常（日志 + 告警），返回通用的兜底错误结构
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

from graphql import GraphQLError

from src.config.constants import ErrorMessages
from src.core.error_utils import extract_client_error_message, unwrap_original_error
from src.core.exceptions import UserFacingError
from src.core.logger import logger
from src.services.monitoring.alerts import AlertRequest, AlertSink, LoggingAlertSink

ErrorHook = Callable[[GraphQLError], dict[str, Any]]
UnhandledErrorLogger = Callable[[Exception], dict[str, Any]]


class ErrorHandlerFactory:
    def __init__(self, alert_sink: AlertSink | None = None):
        self.alert_sink = alert_sink or LoggingAlertSink()

    def handlers(
        self,
        request_id: str,
        query: str,
        variables: dict[str, Any],
        client_id: str | None,
        project_id: str | None,
    ) -> tuple[ErrorHook, UnhandledErrorLogger]:
        alert_request = AlertRequest(
            request_id=request_id,
            client_id=client_id,
            project_id=project_id,
            query=query,
            variables=json.dumps(variables, ensure_ascii=False, default=str),
        )

        def unhandled_error_logger(error: Exception) -> dict[str, Any]:
            logger.opt(exception=error).error(
                "[{}] 未处理的执行异常: {} | client={} project={}",
                request_id,
                extract_client_error_message(error),
                client_id,
                project_id,
            )
            try:
                self.alert_sink.report(error, alert_request)
            except Exception:
                # 告警渠道故障不影响兜底结果的返回
                logger.exception("[{}] 告警上报失败", request_id)
            return {"errors": [{"message": ErrorMessages.UNEXPECTED, "requestId": request_id}]}

        def error_hook(error: GraphQLError) -> dict[str, Any]:
            formatted: dict[str, Any] = dict(error.formatted)
            original = unwrap_original_error(error)
            if original is None:
                return formatted

            extensions = dict(formatted.get("extensions") or {})
            if isinstance(original, UserFacingError):
                formatted["message"] = original.message
                extensions["code"] = original.code
            else:
                # 内部异常不向客户端暴露细节
                unhandled_error_logger(original)
                formatted["message"] = ErrorMessages.UNEXPECTED
                extensions["requestId"] = request_id
            formatted["extensions"] = extensions
            return formatted

        return error_hook, unhandled_error_logger
