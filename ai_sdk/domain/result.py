"""带标签的调用结果。

公开的非流式入口统一返回 Result，而不是把传输错误直接抛给调用方：

    result = client.chat("2+2?")
    if result.ok:
        print(result.value["choices"][0]["message"]["content"])
    else:
        print(result.error.code)
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from ai_sdk.domain.exceptions import BusinessError

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """成功时携带 value，失败时携带 error（二者只有一个有意义）。"""

    value: Optional[T] = None
    error: Optional[BusinessError] = None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: BusinessError) -> "Result[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """返回 value；若为失败结果则抛出其中的错误。"""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]
