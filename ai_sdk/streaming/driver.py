"""流式请求驱动。

open_stream 返回一个 ChunkStream：单消费者、按需拉取的 DeltaChunk 迭代器。

- 每次拉取时才从连接读取下一段数据，没有预读；一段数据里解析出的多个帧
  也是逐个规范化、逐个产出。
- 结束条件（按优先级）：传输错误/超时 -> 以错误状态结束；收到 "[DONE]" -> 正常结束；
  连接读到末尾但没有哨兵 -> 也视为正常结束。
- 错误不会从迭代中抛出，而是记录在 ChunkStream.error 上。
- 中途放弃迭代时调用 close()（或使用 with 语句）即可释放连接；
  不再持有 ChunkStream 的引用时也会立即触发清理。

    with open_stream(request, chunk_timeout=10) as stream:
        for chunk in stream:
            print(chunk.text, end="")
    if not stream.ok:
        print(stream.error.code)
"""

import logging
from typing import Iterator, Optional

import httpx

from ai_sdk.domain.exceptions import BusinessError, TransportError
from ai_sdk.domain.models import DeltaChunk
from ai_sdk.infrastructure.logging.logger import log_event
from ai_sdk.streaming.normalizer import is_done, normalize_chunk
from ai_sdk.streaming.sse import parse_frames
from ai_sdk.transport.http import HttpRequest, decode_body, status_error

# 建立连接的超时与单个数据块的超时分开设置
CONNECT_TIMEOUT = 30.0


class _StreamState:
    """生成器与 ChunkStream 共享的结束状态。"""

    __slots__ = ("error", "done")

    def __init__(self) -> None:
        self.error: Optional[BusinessError] = None
        self.done = False


class ChunkStream:
    """DeltaChunk 的惰性序列。

    Attributes:
        error: 以错误状态结束时的异常（HttpStatusError / TransportError），否则为 None。
        done: 是否收到了 "[DONE]" 哨兵。
    """

    def __init__(self, request: HttpRequest, chunk_timeout: float):
        self._state = _StreamState()
        # 生成器只持有 _state，不持有 self；丢弃 ChunkStream 时引用计数归零即可触发清理
        self._chunks = _iterate(request, chunk_timeout, self._state)

    @property
    def error(self) -> Optional[BusinessError]:
        return self._state.error

    @property
    def done(self) -> bool:
        return self._state.done

    @property
    def ok(self) -> bool:
        return self._state.error is None

    def __iter__(self) -> Iterator[DeltaChunk]:
        return self

    def __next__(self) -> DeltaChunk:
        return next(self._chunks)

    def close(self) -> None:
        """提前结束迭代并释放底层连接。"""
        self._chunks.close()

    def __enter__(self) -> "ChunkStream":
        return self

    def __exit__(self, *exc) -> bool:
        self.close()
        return False


def _iterate(req: HttpRequest, chunk_timeout: float, state: _StreamState) -> Iterator[DeltaChunk]:
    log_ctx = {"url": req.url, "stream": True}
    timeout = httpx.Timeout(chunk_timeout, connect=CONNECT_TIMEOUT)
    count = 0
    try:
        with httpx.Client(timeout=timeout, trust_env=False) as client:
            with client.stream(req.method, req.url, json=req.body, headers=req.headers) as resp:
                if not 200 <= resp.status_code < 300:
                    resp.read()
                    state.error = status_error(resp.status_code, decode_body(resp), url=req.url)
                    log_event(logging.WARNING, "HTTP status error", log_ctx, status=resp.status_code)
                    return

                buffer = ""
                for text in resp.iter_text():
                    frames, buffer = parse_frames(buffer + text)
                    for frame in frames:
                        if is_done(frame.data):
                            state.done = True
                            log_event(logging.INFO, "Stream finished", log_ctx, chunks=count)
                            return
                        chunk = normalize_chunk(frame.data)
                        if chunk is not None:
                            count += 1
                            yield chunk

                if buffer.strip():
                    # 连接结束时残留的半帧按 SSE 约定丢弃
                    log_event(logging.DEBUG, "Discarded unterminated frame", log_ctx, size=len(buffer))
                log_event(logging.INFO, "Stream ended without sentinel", log_ctx, chunks=count)
    except httpx.RequestError as e:
        # 包含 ReadTimeout：超过 chunk_timeout 仍无数据到达
        state.error = TransportError(str(e) or type(e).__name__, cause=e, url=req.url)
        log_event(logging.WARNING, "Transport error", log_ctx, error=str(e), chunks=count)


def open_stream(request: HttpRequest, chunk_timeout: float) -> ChunkStream:
    """为 request 打开一个流。每次调用只建立一次连接，不重试。"""
    return ChunkStream(request, chunk_timeout)
