"""函数调用相关的数据结构。

- ApiFunction: 暴露给模型的函数声明，可选附带本地 callback。
  callback 只在 SDK 内部使用，永远不会出现在请求体中。
- FunctionRegistry: 一次顶层调用内“函数名 -> callback”的只读映射。
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from ai_sdk.infrastructure.logging.logger import log_event

# 回调接收解析后的 JSON 参数，返回值会被序列化为 JSON 发回给模型
FunctionCallback = Callable[[Any], Any]


@dataclass
class ApiFunction:
    """一个可供模型调用的函数声明。"""

    name: str
    description: str
    parameters: Dict[str, Any]
    callback: Optional[FunctionCallback] = None

    def to_declaration(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "parameters": self.parameters,
        }


def unique_functions(functions: Iterable[ApiFunction]) -> List[ApiFunction]:
    """按名称去重：同名函数以最后一次声明为准，位置保持第一次出现的位置。"""
    by_name: Dict[str, ApiFunction] = {}
    for fn in functions:
        if fn.name in by_name:
            log_event(logging.WARNING, "Duplicate function declaration, last one wins", function=fn.name)
        by_name[fn.name] = fn
    return list(by_name.values())


class FunctionRegistry:
    """函数名到 callback 的只读映射。

    没有 callback 的函数仍会声明给模型，但不会注册；模型请求调用它时，
    响应会原样返回给调用方处理。
    """

    def __init__(self, callbacks: Mapping[str, FunctionCallback]):
        self._callbacks = MappingProxyType(dict(callbacks))

    @classmethod
    def from_functions(cls, functions: Iterable[ApiFunction]) -> "FunctionRegistry":
        return cls({fn.name: fn.callback for fn in unique_functions(functions) if fn.callback is not None})

    def get(self, name: str) -> Optional[FunctionCallback]:
        return self._callbacks.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._callbacks

    def __len__(self) -> int:
        return len(self._callbacks)

    def __bool__(self) -> bool:
        return bool(self._callbacks)
