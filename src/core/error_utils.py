"""
错误消息处理工具函数
"""

from graphql import GraphQLError


def extract_client_error_message(error: Exception) -> str:
    """
    从异常中提取客户端友好的错误消息

    优先使用 message 属性（已经是友好处理过的消息），否则回退到异常的字符串表示。
    """
    message = getattr(error, "message", None)
    if message and isinstance(message, str) and message.strip():
        return message

    return str(error) or repr(error)


def unwrap_original_error(error: GraphQLError) -> Exception | None:
    """
    获取 GraphQLError 包装的原始异常

    graphql-core 会把 resolver 抛出的异常包装为 GraphQLError，多层嵌套时逐层展开。
    resolver 直接抛出的 GraphQLError 没有原始异常，返回 None（由引擎自行格式化）。
    """
    original = error.original_error
    while isinstance(original, GraphQLError):
        if original.original_error is None:
            return None
        original = original.original_error
    return original
