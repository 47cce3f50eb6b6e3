"""
应用配置

所有配置项在进程启动时从环境变量读取一次，之后不再变化。
"""

from __future__ import annotations

import os

from src.config.constants import BatchDefaults, SlowRequestDefaults


class Config:
    def __init__(self) -> None:
        # 慢请求告警开关：只有显式设置为 "1" 才会关闭
        self.report_long_requests_enabled = (
            os.getenv("REPORT_LONG_REQUESTS_DISABLED") != "1"
        )
        self.slow_request_threshold_ms = int(
            os.getenv("SLOW_REQUEST_THRESHOLD_MS", str(SlowRequestDefaults.THRESHOLD_MS))
        )
        # 批量请求的并发上限，0 表示不限制
        self.batch_max_concurrency = int(
            os.getenv("GRAPHQL_BATCH_MAX_CONCURRENCY", str(BatchDefaults.MAX_CONCURRENCY))
        )
        # 当前 API 入口的功能标记
        self.api_feature = os.getenv("GRAPHQL_API_FEATURE", "simple_api").lower()


config = Config()
