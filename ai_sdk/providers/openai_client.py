"""OpenAI Provider 适配器。

本模块负责：

1. 接收 prompt 与显式的 ChatOptions / CompletionOptions。
2. 将其转换为 OpenAI chat/completions 与 completions 的 JSON 请求体
   （值为 None 的可选字段不会出现在请求体中）。
3. 根据 options.stream 选择流式驱动（ChunkStream）或非流式执行器（Result）。
4. 声明了带 callback 的函数时，交给 FunctionCallOrchestrator 自动完成调用闭环。

API Key 在构造时解析一次并写入请求头，缺失时直接抛出 ConfigurationError。
"""

import json
import logging
from dataclasses import replace
from typing import Any, Dict, List, Optional, Union

from ai_sdk.config.settings import settings
from ai_sdk.domain.exceptions import ConfigurationError, StructuredOutputError, ValidationError
from ai_sdk.domain.models import (
    ChatOptions,
    CompletionOptions,
    Message,
    MessageLike,
    StreamOptions,
)
from ai_sdk.domain.result import Result
from ai_sdk.functions.definitions import ApiFunction, FunctionRegistry, unique_functions
from ai_sdk.functions.orchestrator import FunctionCallOrchestrator
from ai_sdk.infrastructure.logging.logger import log_event
from ai_sdk.providers.registry import OPENAI_CONFIG
from ai_sdk.streaming.driver import ChunkStream, open_stream
from ai_sdk.transport.http import HttpRequest, execute

STRUCTURED_SYSTEM_PROMPT = (
    "You are a structured data extractor. "
    "Your response must be valid JSON that matches this schema:\n{schema}\n"
)


def _compact(body: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in body.items() if v is not None}


class OpenAIClient:
    """OpenAI 客户端实现。

    - name: Provider 名称（供日志/调试使用）。
    - chat / completion: 对外统一调用入口。
    """

    name = "openai"

    def __init__(self, cfg=settings, api_key: Optional[str] = None):
        # cfg 里包含 base_url、默认模型、超时等配置
        self._settings = cfg
        key = api_key or getattr(cfg, "openai_api_key", None)
        if not key:
            raise ConfigurationError(code="MISSING_API_KEY", message="OPENAI_API_KEY not set")
        base = getattr(cfg, "openai_base_url", None) or OPENAI_CONFIG.base_url
        self._base_url = base.rstrip("/")
        self._headers = {
            "Authorization": f"Bearer {key}",
            "Content-Type": "application/json",
        }

    # ---- chat ----

    def chat(
        self,
        prompt: Union[str, List[MessageLike]],
        options: Optional[ChatOptions] = None,
        stream_options: Optional[StreamOptions] = None,
    ) -> Union[Result[Dict[str, Any]], ChunkStream]:
        opts = options or ChatOptions()
        messages = self._format_chat_prompt(prompt)
        functions = unique_functions(opts.functions)
        url = self._base_url + OPENAI_CONFIG.chat_path
        log_event(
            logging.INFO,
            "Chat request",
            model=self._chat_model(opts),
            stream=opts.stream,
            message_count=len(messages),
            function_count=len(functions),
        )

        if opts.stream:
            body = self._chat_body(messages, opts, functions, stream=True)
            return open_stream(self._request(url, body), self._chunk_timeout(stream_options))

        def send(conversation: List[MessageLike]) -> Result[Dict[str, Any]]:
            body = self._chat_body(conversation, opts, functions, stream=False)
            return execute(self._request(url, body), timeout=self._http_timeout(opts))

        registry = FunctionRegistry.from_functions(functions)
        if not registry:
            return send(messages)
        max_rounds = opts.max_function_rounds
        if max_rounds is None:
            max_rounds = getattr(self._settings, "max_function_rounds", None)
        return FunctionCallOrchestrator(registry, max_rounds=max_rounds).run(messages, send)

    # ---- completion ----

    def completion(
        self,
        prompt: str,
        options: Optional[CompletionOptions] = None,
        stream_options: Optional[StreamOptions] = None,
    ) -> Union[Result[Dict[str, Any]], ChunkStream]:
        if not isinstance(prompt, str):
            raise ValidationError(code="INVALID_PROMPT", message="completion prompt must be a string")
        opts = options or CompletionOptions()
        model = opts.model or getattr(self._settings, "default_completion_model", None) or OPENAI_CONFIG.default_completion_model
        body = _compact({
            "model": model,
            "prompt": prompt,
            "stream": opts.stream,
            "echo": opts.echo,
            "suffix": opts.suffix,
            "logit_bias": opts.logit_bias,
            **self._tunables(opts),
        })
        request = self._request(self._base_url + OPENAI_CONFIG.completion_path, body)
        log_event(logging.INFO, "Completion request", model=model, stream=opts.stream)
        if opts.stream:
            return open_stream(request, self._chunk_timeout(stream_options))
        return execute(request, timeout=self._http_timeout(opts))

    # ---- 便捷封装 ----

    def generate_text(
        self,
        prompt: Union[str, List[MessageLike]],
        options: Optional[ChatOptions] = None,
    ) -> Result[str]:
        """非流式 chat，返回首个候选回答的文本。"""
        result = self.chat(prompt, replace(options or ChatOptions(), stream=False))
        if not result.ok:
            return Result.failure(result.error)
        return Result.success(self._first_message(result.value).get("content"))

    def generate_structured(
        self,
        prompt: str,
        schema: Dict[str, Any],
        options: Optional[ChatOptions] = None,
    ) -> Result[Any]:
        """要求模型按 schema 输出 JSON，并返回解析后的对象。"""
        messages: List[MessageLike] = [
            Message(role="system", content=STRUCTURED_SYSTEM_PROMPT.format(schema=json.dumps(schema))),
            Message(role="user", content=prompt),
        ]
        result = self.chat(messages, replace(options or ChatOptions(), stream=False))
        if not result.ok:
            return Result.failure(result.error)
        content = self._first_message(result.value).get("content")
        try:
            return Result.success(json.loads(content))
        except (TypeError, ValueError):
            return Result.failure(
                StructuredOutputError(
                    code="STRUCTURED_OUTPUT_INVALID",
                    message="Failed to parse JSON response",
                    content=content,
                )
            )

    # ---- 辅助方法 ----

    def _request(self, url: str, body: Dict[str, Any]) -> HttpRequest:
        return HttpRequest(method="POST", url=url, headers=dict(self._headers), body=body)

    def _chat_model(self, opts: ChatOptions) -> str:
        return opts.model or getattr(self._settings, "default_chat_model", None) or OPENAI_CONFIG.default_chat_model

    def _chat_body(
        self,
        messages: List[MessageLike],
        opts: ChatOptions,
        functions: List[ApiFunction],
        stream: bool,
    ) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "model": self._chat_model(opts),
            "messages": [self._message_to_payload(m) for m in messages],
            "stream": stream,
            **self._tunables(opts),
        }
        if functions:
            body["functions"] = [fn.to_declaration() for fn in functions]
            body["function_call"] = opts.function_call
        return _compact(body)

    @staticmethod
    def _tunables(opts: Union[ChatOptions, CompletionOptions]) -> Dict[str, Any]:
        return {
            "temperature": opts.temperature,
            "max_tokens": opts.max_tokens,
            "top_p": opts.top_p,
            "frequency_penalty": opts.frequency_penalty,
            "presence_penalty": opts.presence_penalty,
            "stop": opts.stop,
        }

    def _http_timeout(self, opts: Union[ChatOptions, CompletionOptions]) -> Optional[float]:
        if opts.timeout is not None:
            return opts.timeout
        return getattr(self._settings, "http_timeout", None)

    def _chunk_timeout(self, stream_options: Optional[StreamOptions]) -> float:
        if stream_options and stream_options.chunk_timeout is not None:
            return stream_options.chunk_timeout
        return getattr(self._settings, "chunk_timeout", None) or OPENAI_CONFIG.default_chunk_timeout

    @staticmethod
    def _format_chat_prompt(prompt: Union[str, List[MessageLike]]) -> List[MessageLike]:
        if isinstance(prompt, str):
            return [Message(role="user", content=prompt)]
        if isinstance(prompt, list):
            return list(prompt)
        raise ValidationError(code="INVALID_PROMPT", message="chat prompt must be a string or a list of messages")

    @staticmethod
    def _message_to_payload(message: MessageLike) -> Dict[str, Any]:
        if isinstance(message, dict):
            return dict(message)
        # content 即使为 None 也要保留，assistant 的函数调用消息要求该字段存在
        payload: Dict[str, Any] = {"role": message.role, "content": message.content}
        if message.name:
            payload["name"] = message.name
        if message.function_call:
            payload["function_call"] = {
                "name": message.function_call.name,
                "arguments": message.function_call.arguments,
            }
        return payload

    @staticmethod
    def _first_message(response: Dict[str, Any]) -> Dict[str, Any]:
        choices = response.get("choices") if isinstance(response, dict) else None
        if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
            return {}
        message = choices[0].get("message")
        return message if isinstance(message, dict) else {}
