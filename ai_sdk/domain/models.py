"""统一的消息、选项与流式增量数据模型。

本模块定义了 SDK 内部各层共享的标准数据结构：

- Message / FunctionCall: 一条对话消息以及模型发起的函数调用。
- ChatOptions / CompletionOptions / StreamOptions: 显式的调用选项，
  取代零散的 dict 选项；值为 None 的字段不会出现在请求体中。
- DeltaChunk / DeltaChoice / Delta: 流式返回经规范化后的增量结构。
- SseFrame: SSE 解码器产出的临时帧，仅在流式管线内部流转。

非流式响应（Response）保持为 Provider 返回的原始 dict，SDK 只读取
choices[0].finish_reason 与 choices[0].message.function_call 两处。
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional, Union, TYPE_CHECKING

if TYPE_CHECKING:
    # 仅在类型检查时导入，避免运行时循环依赖
    from ai_sdk.functions.definitions import ApiFunction


# 消息角色（与 OpenAI chat/completions 的 role 字段对应）
Role = Literal["system", "user", "assistant", "function"]


@dataclass
class FunctionCall:
    """模型发起的一次函数调用，arguments 为原样保留的 JSON 字符串。"""

    name: str
    arguments: str


@dataclass
class Message:
    """一条对话消息。

    - content: 纯文本内容；assistant 发起函数调用时为 None。
    - name: role 为 "function" 时表示被调用的函数名。
    - function_call: role 为 "assistant" 且模型请求调用函数时的调用信息。
    """

    role: Role
    content: Optional[str]
    name: Optional[str] = None
    function_call: Optional[FunctionCall] = None


# 调用方既可以传 Message，也可以直接传与线上格式一致的 dict
MessageLike = Union[Message, Dict[str, Any]]


@dataclass
class ChatOptions:
    """chat 调用选项。

    优先级：这里显式给出的值 > settings 中的默认值 > registry 中的常量。
    """

    model: Optional[str] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    top_p: Optional[float] = None
    frequency_penalty: Optional[float] = None
    presence_penalty: Optional[float] = None
    stop: Optional[Union[str, List[str]]] = None
    stream: bool = False
    # 暴露给模型的函数声明；带 callback 的函数会被自动执行
    functions: List["ApiFunction"] = field(default_factory=list)
    # "auto" / "none" / {"name": ...}
    function_call: Optional[Union[str, Dict[str, str]]] = None
    # 函数调用往返上限，None 表示沿用 settings.max_function_rounds
    max_function_rounds: Optional[int] = None
    # 非流式单次往返超时（秒），None 表示沿用 settings.http_timeout
    timeout: Optional[float] = None


@dataclass
class CompletionOptions:
    """completion（旧版文本补全）调用选项。"""

    model: Optional[str] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    top_p: Optional[float] = None
    frequency_penalty: Optional[float] = None
    presence_penalty: Optional[float] = None
    stop: Optional[Union[str, List[str]]] = None
    stream: bool = False
    echo: bool = False
    suffix: Optional[str] = None
    logit_bias: Optional[Dict[str, float]] = None
    timeout: Optional[float] = None


@dataclass
class StreamOptions:
    """流式调用选项。chunk_timeout 为两次数据到达之间允许的最长间隔（秒）。"""

    chunk_timeout: Optional[float] = None


@dataclass
class Usage:
    """Provider 返回的 token 统计信息。"""

    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


@dataclass
class Delta:
    """单个 choice 的增量内容。content 永远是字符串，缺省为空串。"""

    content: str = ""
    role: Optional[str] = None
    function_call: Optional[Dict[str, Any]] = None


@dataclass
class DeltaChoice:
    """流式返回中的单个候选增量。finish_reason 在最后一个增量之前为 None。"""

    index: int
    delta: Delta
    finish_reason: Optional[str] = None


@dataclass
class DeltaChunk:
    """规范化后的流式增量。"""

    id: str
    model: str
    choices: List[DeltaChoice]
    usage: Optional[Usage] = None

    @property
    def text(self) -> str:
        """所有 choice 的 content 拼接结果，便于直接打印。"""
        return "".join(choice.delta.content for choice in self.choices)


@dataclass(frozen=True)
class SseFrame:
    """一个完整的 SSE 事件。"""

    event: Optional[str]
    data: str
