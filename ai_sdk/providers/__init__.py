"""LLM Provider 集成层。

该包下的模块负责：
- 定义 Provider 抽象接口 (base)。
- 维护端点与默认模型配置 (registry)。
- 提供具体实现 (openai_client)。
"""

from typing import Optional

from ai_sdk.config.settings import settings
from ai_sdk.domain.exceptions import ValidationError
from ai_sdk.providers.base import ProviderClient
from ai_sdk.providers.openai_client import OpenAIClient


def create_provider(name: Optional[str] = None, api_key: Optional[str] = None) -> ProviderClient:
    """根据名称创建 Provider 实例，默认使用 openai。"""

    provider_name = (name or "openai").lower()
    if provider_name == "openai":
        return OpenAIClient(settings, api_key=api_key)
    raise ValidationError(code="UNKNOWN_PROVIDER", message=f"Unknown provider: {name!r}")


__all__ = ["ProviderClient", "OpenAIClient", "create_provider"]
