"""
统一日志系统 - 基于 loguru

日志级别策略:
- DEBUG: 查询执行细节、中间件调用
- INFO:  请求处理、查询文本与变量
- WARNING: 慢请求、可预期的降级
- ERROR: 未处理的执行异常、告警事件

输出策略:
- 控制台: 开发环境=DEBUG, 生产环境=INFO (通过 LOG_LEVEL 控制)
- 文件: 默认写入 LOG_DIR (默认 ./logs)，可通过 LOG_DISABLE_FILE=true 关闭

使用方式:
    from src.core.logger import logger

    logger.info("[{}] 收到查询", request_id)
    logger.exception("[{}] 执行异常", request_id)
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from loguru import logger

IS_DOCKER = (
    os.path.exists("/.dockerenv")
    or os.environ.get("DOCKER_CONTAINER", "false").lower() == "true"
)

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG" if not IS_DOCKER else "INFO").upper()

# 测试环境下通常关闭文件日志
DISABLE_FILE_LOG = os.getenv("LOG_DISABLE_FILE", "false").lower() == "true"

LOG_DIR = Path(os.getenv("LOG_DIR", str(Path.cwd() / "logs")))

CONSOLE_FORMAT_DEV = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{message}</cyan>"
)

CONSOLE_FORMAT_PROD = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {message}"

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} | {message}"

logger.remove()

logger.add(
    sys.stdout,
    format=CONSOLE_FORMAT_PROD if IS_DOCKER else CONSOLE_FORMAT_DEV,
    level=LOG_LEVEL,
    colorize=not IS_DOCKER,
    # 生产环境不输出变量值，避免查询变量中的敏感数据进入日志
    backtrace=not IS_DOCKER,
    diagnose=not IS_DOCKER,
)

if not DISABLE_FILE_LOG:
    LOG_DIR.mkdir(parents=True, exist_ok=True)

    file_log_config = {
        "format": FILE_FORMAT,
        "rotation": "100 MB",
        "retention": "30 days",
        "compression": "gz",
        "enqueue": False,
        "encoding": "utf-8",
        "catch": True,
        "backtrace": not IS_DOCKER,
        "diagnose": not IS_DOCKER,
    }

    logger.add(  # type: ignore[call-overload]
        LOG_DIR / "gateway.log",
        level="DEBUG",
        **file_log_config,
    )

    # 未处理异常与告警单独落盘，便于排查
    error_log_config = file_log_config.copy()
    error_log_config["rotation"] = "50 MB"
    logger.add(  # type: ignore[call-overload]
        LOG_DIR / "error.log",
        level="ERROR",
        **error_log_config,
    )

logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)

__all__ = ["logger"]
