"""函数调用（function calling）支持。

- definitions: ApiFunction 声明与 FunctionRegistry 注册表。
- orchestrator: 自动执行回调并续写对话的编排循环。
"""

from ai_sdk.functions.definitions import ApiFunction, FunctionRegistry
from ai_sdk.functions.orchestrator import FunctionCallOrchestrator, extract_function_call

__all__ = ["ApiFunction", "FunctionRegistry", "FunctionCallOrchestrator", "extract_function_call"]
