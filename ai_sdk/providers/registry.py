"""Provider 配置。

集中维护端点路径与默认模型，settings 中未配置时使用这里的值。"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ProviderConfig:
    """某个 Provider 的整体配置。"""

    name: str
    base_url: str
    chat_path: str
    completion_path: str
    default_chat_model: str
    default_completion_model: str
    # 流式两次数据到达之间的默认超时（秒）
    default_chunk_timeout: float


OPENAI_CONFIG = ProviderConfig(
    name="openai",
    base_url="https://api.openai.com/v1",
    chat_path="/chat/completions",
    completion_path="/completions",
    default_chat_model="gpt-3.5-turbo",
    default_completion_model="gpt-3.5-turbo-instruct",
    default_chunk_timeout=10.0,
)
