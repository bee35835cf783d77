"""Provider 抽象接口。

上层代码不直接依赖具体厂商的 HTTP 细节，而是依赖此协议：

- chat / completion: 根据 options.stream 选择流式（返回 ChunkStream）
  或非流式（返回 Result）路径。
- generate_text / generate_structured: 基于非流式 chat 的便捷封装。
"""

from typing import Any, Dict, List, Optional, Protocol, Union

from ai_sdk.domain.models import ChatOptions, CompletionOptions, MessageLike, StreamOptions
from ai_sdk.domain.result import Result
from ai_sdk.streaming.driver import ChunkStream


class ProviderClient(Protocol):
    """LLM Provider 客户端协议。"""

    name: str

    def chat(
        self,
        prompt: Union[str, List[MessageLike]],
        options: Optional[ChatOptions] = None,
        stream_options: Optional[StreamOptions] = None,
    ) -> Union[Result[Dict[str, Any]], ChunkStream]:
        ...

    def completion(
        self,
        prompt: str,
        options: Optional[CompletionOptions] = None,
        stream_options: Optional[StreamOptions] = None,
    ) -> Union[Result[Dict[str, Any]], ChunkStream]:
        ...

    def generate_text(self, prompt: Union[str, List[MessageLike]], options: Optional[ChatOptions] = None) -> Result[str]:
        ...

    def generate_structured(
        self, prompt: str, schema: Dict[str, Any], options: Optional[ChatOptions] = None
    ) -> Result[Any]:
        ...
