"""把单个 SSE data 负载规范化为 DeltaChunk。

- "[DONE]" 是结束哨兵，返回 None。
- 无法解析的负载视为坏帧，记录 debug 日志后返回 None，流继续。
- 缺失的可选字段填默认值：delta.content -> ""（非字符串同样按 "" 处理），
  role / function_call -> None。
- completions 接口的片段没有 delta，文本取自 choices[].text。
- 未知字段直接忽略，兼容 Provider 后续新增的字段。
"""

import json
import logging
from typing import Any, Dict, List, Optional

from ai_sdk.domain.exceptions import MalformedFrameError
from ai_sdk.domain.models import Delta, DeltaChoice, DeltaChunk, Usage
from ai_sdk.infrastructure.logging.logger import log_event

DONE_SENTINEL = "[DONE]"


def is_done(data: str) -> bool:
    return data.strip() == DONE_SENTINEL


def normalize_chunk(data: str) -> Optional[DeltaChunk]:
    if is_done(data):
        return None
    try:
        return _build_chunk(_decode(data))
    except MalformedFrameError as exc:
        log_event(logging.DEBUG, "Skipped malformed frame", reason=exc.message, data=data[:200])
        return None


def _decode(data: str) -> Dict[str, Any]:
    try:
        payload = json.loads(data)
    except json.JSONDecodeError as exc:
        raise MalformedFrameError(code="MALFORMED_FRAME", message=f"invalid JSON: {exc.msg}")
    if not isinstance(payload, dict):
        raise MalformedFrameError(code="MALFORMED_FRAME", message="payload is not an object")
    return payload


def _build_chunk(payload: Dict[str, Any]) -> DeltaChunk:
    raw_choices = payload.get("choices")
    if raw_choices is None:
        raw_choices = []
    if not isinstance(raw_choices, list):
        raise MalformedFrameError(code="MALFORMED_FRAME", message="choices is not a list")

    choices: List[DeltaChoice] = []
    for i, ch in enumerate(raw_choices):
        if not isinstance(ch, dict):
            raise MalformedFrameError(code="MALFORMED_FRAME", message="choice is not an object")
        delta_raw = ch.get("delta") or {}
        if not isinstance(delta_raw, dict):
            raise MalformedFrameError(code="MALFORMED_FRAME", message="delta is not an object")
        content = delta_raw.get("content")
        if "delta" not in ch and isinstance(ch.get("text"), str):
            # completions 接口的流式片段把文本放在 choices[].text
            content = ch["text"]
        index = ch.get("index")
        choices.append(
            DeltaChoice(
                index=index if isinstance(index, int) else i,
                delta=Delta(
                    content=content if isinstance(content, str) else "",
                    role=delta_raw.get("role"),
                    function_call=delta_raw.get("function_call"),
                ),
                finish_reason=ch.get("finish_reason"),
            )
        )

    return DeltaChunk(
        id=payload.get("id") or "",
        model=payload.get("model") or "",
        choices=choices,
        usage=_parse_usage(payload.get("usage")),
    )


def _parse_usage(raw: Any) -> Optional[Usage]:
    if not isinstance(raw, dict) or not raw:
        return None
    return Usage(
        prompt_tokens=raw.get("prompt_tokens", 0),
        completion_tokens=raw.get("completion_tokens", 0),
        total_tokens=raw.get("total_tokens", 0),
    )
