"""非流式 HTTP 执行器。

execute 只发起一次请求，不做重试与退避：
- 2xx 且响应体是 JSON -> Result.success(dict)
- 429 -> RateLimitError；其他非 2xx -> HttpStatusError（body 尽量按 JSON 解析）
- DNS 失败、连接重置、超时等 -> TransportError
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import httpx

from ai_sdk.domain.exceptions import HttpStatusError, RateLimitError, TransportError
from ai_sdk.domain.result import Result
from ai_sdk.infrastructure.logging.logger import log_event


@dataclass
class HttpRequest:
    """已经构造好的请求：方法、完整 URL、请求头以及 JSON 请求体。"""

    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Dict[str, Any] = field(default_factory=dict)


def execute(request: HttpRequest, timeout: Optional[float] = None) -> Result[Dict[str, Any]]:
    log_ctx = {"url": request.url, "stream": False}
    try:
        with httpx.Client(timeout=timeout, trust_env=False) as client:
            resp = client.request(
                request.method,
                request.url,
                json=request.body,
                headers=request.headers,
            )
    except httpx.RequestError as e:
        # 网络错误：DNS 失败、连接超时等
        log_event(logging.WARNING, "Transport error", log_ctx, error=str(e))
        return Result.failure(TransportError(str(e) or type(e).__name__, cause=e, url=request.url))

    if not 200 <= resp.status_code < 300:
        error = status_error(resp.status_code, decode_body(resp), url=request.url)
        log_event(logging.WARNING, "HTTP status error", log_ctx, status=resp.status_code)
        return Result.failure(error)

    try:
        data = resp.json()
    except ValueError:
        return Result.failure(
            HttpStatusError(resp.status_code, resp.text, code="INVALID_RESPONSE_BODY", url=request.url)
        )
    log_event(logging.INFO, "Request completed", log_ctx, status=resp.status_code)
    return Result.success(data)


def status_error(status: int, body: Any, **extra: Any) -> HttpStatusError:
    if status == 429:
        # 限流错误交给上层做重试/退避
        return RateLimitError(body, **extra)
    return HttpStatusError(status, body, **extra)


def decode_body(resp: Any) -> Any:
    """响应体能解析为 JSON 就返回解析结果，否则返回原始文本。"""
    try:
        return json.loads(resp.text)
    except ValueError:
        return resp.text
