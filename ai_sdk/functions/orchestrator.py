"""函数调用编排。

实现流程：
1. 发送当前消息列表（非流式）。
2. 若首个 choice 的 finish_reason 不是 "function_call"，直接返回响应。
3. 否则取出 function_call，在注册表中查找回调：
   - 未注册：原样返回响应，由调用方自行处理；
   - 已注册：解析参数、同步执行回调，把 assistant 的调用消息和 function 结果消息
     追加到消息列表的副本上，回到步骤 1。
4. 每一轮严格串行；往返次数只在配置了 max_rounds 时受限。
"""

import json
import logging
from typing import Any, Callable, Dict, List, Optional

from ai_sdk.domain.exceptions import CallbackError, FunctionArgumentError, FunctionRoundLimitError
from ai_sdk.domain.models import FunctionCall, Message, MessageLike
from ai_sdk.domain.result import Result
from ai_sdk.functions.definitions import FunctionCallback, FunctionRegistry
from ai_sdk.infrastructure.logging.logger import log_event

FUNCTION_CALL_REASON = "function_call"

SendFn = Callable[[List[MessageLike]], Result[Dict[str, Any]]]


def extract_function_call(response: Dict[str, Any]) -> Optional[FunctionCall]:
    """当首个 choice 以 function_call 结束时返回调用信息，否则返回 None。"""
    if not isinstance(response, dict):
        return None
    choices = response.get("choices")
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        return None
    choice = choices[0]
    if choice.get("finish_reason") != FUNCTION_CALL_REASON:
        return None
    message = choice.get("message")
    if not isinstance(message, dict):
        return None
    call = message.get("function_call")
    if not isinstance(call, dict) or not call.get("name"):
        return None
    arguments = call.get("arguments")
    if not isinstance(arguments, str):
        # 个别兼容接口直接返回对象，这里统一回写为 JSON 字符串
        arguments = json.dumps(arguments if arguments is not None else {}, ensure_ascii=False)
    return FunctionCall(name=call["name"], arguments=arguments)


class FunctionCallOrchestrator:
    def __init__(self, registry: FunctionRegistry, max_rounds: Optional[int] = None):
        self._registry = registry
        self._max_rounds = max_rounds

    def run(self, messages: List[MessageLike], send: SendFn) -> Result[Dict[str, Any]]:
        # 只在副本上追加，调用方持有的列表保持不变
        conversation: List[MessageLike] = list(messages)
        rounds = 0
        while True:
            result = send(conversation)
            if not result.ok:
                return result

            call = extract_function_call(result.value or {})
            if call is None:
                return result

            callback = self._registry.get(call.name)
            if callback is None:
                log_event(logging.INFO, "Unregistered function requested, returning response", function=call.name)
                return result

            if self._max_rounds is not None and rounds >= self._max_rounds:
                log_event(logging.WARNING, "Function round limit reached", function=call.name, rounds=rounds)
                return Result.failure(
                    FunctionRoundLimitError(
                        code="FUNCTION_ROUND_LIMIT",
                        message=f"function call rounds exceeded {self._max_rounds}",
                        function=call.name,
                    )
                )

            rounds += 1
            log_event(logging.INFO, "Function round", function=call.name, round=rounds, max_rounds=self._max_rounds)
            content = self._invoke(call, callback)
            conversation = conversation + [
                Message(role="assistant", content=None, function_call=call),
                Message(role="function", name=call.name, content=content),
            ]

    @staticmethod
    def _invoke(call: FunctionCall, callback: FunctionCallback) -> str:
        try:
            args = json.loads(call.arguments)
        except json.JSONDecodeError as exc:
            raise FunctionArgumentError(
                code="INVALID_FUNCTION_ARGUMENTS",
                message=f"arguments for {call.name} are not valid JSON: {exc.msg}",
                function=call.name,
                arguments=call.arguments,
            ) from exc

        try:
            value = callback(args)
        except Exception as exc:
            raise CallbackError(
                code="CALLBACK_FAILED",
                message=f"callback for {call.name} failed: {exc}",
                http_status=500,
                function=call.name,
            ) from exc

        try:
            return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
        except (TypeError, ValueError) as exc:
            raise CallbackError(
                code="CALLBACK_RESULT_NOT_SERIALIZABLE",
                message=f"result of {call.name} is not JSON serializable: {exc}",
                http_status=500,
                function=call.name,
            ) from exc
