"""ai_sdk 顶层包。

该包提供调用远程 LLM HTTP API 的客户端实现，
包括配置加载、领域模型、SSE 流式解码与增量规范化、
非流式请求执行，以及自动执行函数回调的函数调用编排。
"""

from ai_sdk.domain.models import ChatOptions, CompletionOptions, Message, StreamOptions
from ai_sdk.domain.result import Result
from ai_sdk.functions.definitions import ApiFunction
from ai_sdk.providers import OpenAIClient, create_provider

__all__ = [
    "ApiFunction",
    "ChatOptions",
    "CompletionOptions",
    "Message",
    "OpenAIClient",
    "Result",
    "StreamOptions",
    "create_provider",
]
