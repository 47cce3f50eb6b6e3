"""
告警上报

告警事件与普通日志分开：AlertSink 负责把异常和请求元数据送到带外的告警渠道。
默认实现只写 ERROR 日志（error.log 会单独落盘），部署时可替换为其他实现。
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Protocol

from src.core.logger import logger


@dataclass(frozen=True)
class AlertRequest:
    """随告警一起上报的请求信息"""

    request_id: str
    client_id: str | None = None
    project_id: str | None = None
    query: str = ""
    variables: str = ""


class AlertSink(Protocol):
    def report(self, error: BaseException, request: AlertRequest) -> None: ...


class LoggingAlertSink:
    """通过 loguru 输出告警"""

    def report(self, error: BaseException, request: AlertRequest) -> None:
        logger.opt(exception=error).error(
            "[{}] 告警: {}: {} | {}",
            request.request_id,
            type(error).__name__,
            error,
            asdict(request),
        )
