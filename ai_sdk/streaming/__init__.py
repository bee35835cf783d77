"""流式响应管线：SSE 解码 -> 增量规范化 -> 按需拉取的 ChunkStream。"""

from ai_sdk.streaming.driver import ChunkStream, open_stream
from ai_sdk.streaming.normalizer import normalize_chunk
from ai_sdk.streaming.sse import parse_frames

__all__ = ["ChunkStream", "open_stream", "normalize_chunk", "parse_frames"]
