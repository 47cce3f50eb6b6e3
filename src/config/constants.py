"""
默认常量定义
"""


class SlowRequestDefaults:
    """慢请求告警默认值"""

    # 超过该耗时（毫秒）的请求会触发告警
    THRESHOLD_MS = 2000


class BatchDefaults:
    """批量查询默认值"""

    # 0 表示不限制单个批量请求内的并发数
    MAX_CONCURRENCY = 0


class ErrorMessages:
    """返回给客户端的通用错误消息"""

    UNEXPECTED = (
        "There was an internal server error while executing your query. "
        "Please contact support and include the request id."
    )
    PROJECT_LOCKED = "This project is locked down. Mutations are currently disabled."
