"""统一业务异常模型。

SDK 内所有对外可见的错误都继承自 BusinessError，
调用方可以只捕获基类，也可以按具体子类区分处理：

- 传输层问题（TransportError / HttpStatusError）由公开入口包装成失败的 Result，
  流式入口则以 ChunkStream.error 的形式给出，不会直接抛出。
- 配置缺失、函数参数非法、回调自身失败属于调用契约问题，直接抛出。
"""

from typing import Any, Optional


class BusinessError(Exception):
    """业务异常基类。

    Attributes:
        code: 机器可读错误码（如 "MISSING_API_KEY"）。
        message: 用户可读错误信息。
        http_status: 映射到 HTTP 时可用的状态码，默认 400。
        extra: 其他补充字段（例如 url、function 名称等）。
    """

    def __init__(self, code: str, message: str, http_status: int = 400, **extra):
        self.code = code
        self.message = message
        self.http_status = http_status
        self.extra = extra
        super().__init__(message)


class ConfigurationError(BusinessError):
    """配置缺失或非法，例如未提供 API Key。在发起任何请求之前抛出。"""


class ValidationError(BusinessError):
    """调用参数校验失败（如 completion 的 prompt 不是字符串）。"""


class TransportError(BusinessError):
    """网络层错误：DNS 失败、连接被重置、超时等。

    cause 保存底层 httpx 异常，便于调用方进一步判断。
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None, **extra):
        super().__init__(code="TRANSPORT_ERROR", message=message, http_status=503, **extra)
        self.cause = cause


class HttpStatusError(BusinessError):
    """Provider 返回非 2xx 状态码。

    body 尽量解析为 JSON，解析失败时保留原始文本。
    """

    def __init__(self, status: int, body: Any, code: str = "HTTP_STATUS_ERROR", **extra):
        super().__init__(code=code, message=f"HTTP {status}", http_status=status, **extra)
        self.status = status
        self.body = body


class RateLimitError(HttpStatusError):
    """Provider 限流（429），本 SDK 不做重试，由上层决定退避策略。"""

    def __init__(self, body: Any, **extra):
        super().__init__(429, body, code="RATE_LIMIT", **extra)


class MalformedFrameError(BusinessError):
    """单个 SSE 帧无法解析。仅在内部使用，该帧会被跳过。"""


class FunctionArgumentError(BusinessError):
    """模型给出的 function_call.arguments 不是合法 JSON。"""


class CallbackError(BusinessError):
    """调用方注册的函数回调执行失败，原始异常通过 __cause__ 保留。"""


class FunctionRoundLimitError(BusinessError):
    """函数调用往返次数超过配置的上限。"""


class StructuredOutputError(BusinessError):
    """结构化生成时模型回复无法解析为 JSON。"""
