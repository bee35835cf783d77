"""Server-Sent Events 帧解码。

parse_frames 是一个纯函数：输入为“上次剩余的文本 + 新到达的文本”，
输出为本次能确定的完整帧以及剩余文本。调用方只需要把剩余文本原样
与下一段数据拼接后再次调用，即可在任意切分位置上恢复解析：

    buffer = ""
    for text in response.iter_text():
        frames, buffer = parse_frames(buffer + text)
        ...

帧以空行结束（"\\n\\n" 或 "\\r\\n\\r\\n"）。帧内只关心 data 与 event 字段，
id / retry / 注释行（以 ":" 开头）以及无法识别的行一律忽略。
"""

from typing import List, Optional, Tuple

from ai_sdk.domain.models import SseFrame

_FRAME_SEPARATOR = "\n\n"


def parse_frames(buffer: str) -> Tuple[List[SseFrame], str]:
    """解析 buffer 中所有完整的帧，返回 (frames, remainder)。"""

    # 统一换行；末尾孤立的 "\r" 会留在 remainder 里，等下一段的 "\n" 到达后再合并
    text = buffer.replace("\r\n", "\n")
    end = text.rfind(_FRAME_SEPARATOR)
    if end == -1:
        return [], text

    frames: List[SseFrame] = []
    for block in text[:end].split(_FRAME_SEPARATOR):
        frame = _parse_block(block)
        if frame is not None:
            frames.append(frame)
    return frames, text[end + len(_FRAME_SEPARATOR):]


def _parse_block(block: str) -> Optional[SseFrame]:
    event: Optional[str] = None
    data_lines: List[str] = []
    for line in block.split("\n"):
        if not line or line.startswith(":"):
            continue
        name, _, value = line.partition(":")
        if value.startswith(" "):
            value = value[1:]
        if name == "data":
            data_lines.append(value)
        elif name == "event":
            event = value
    # 没有 data 行的事件不派发
    if not data_lines:
        return None
    return SseFrame(event=event, data="\n".join(data_lines))
