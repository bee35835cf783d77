"""领域层模型与协议。

包含：
- models: Message / ChatOptions / DeltaChunk 等统一模型。
- result: 带标签的成功/失败结果 Result。
- exceptions: 业务异常类型定义。
"""
