"""会话内共享的值类型。

本模块定义了控制器、日志与前端之间共享的标准数据结构：

- Origin: 消息来源（用户 / 助手）。
- Message: 一条不可变的会话消息。
- RequestState: 控制器的请求状态（空闲 / 等待回复）。

所有结构一经创建便不再修改，前端只通过快照读取它们。
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict
from uuid import uuid4


class Origin(str, Enum):
    """消息作者。取值与 OpenAI 的 role 字段一致，便于日志与序列化。"""

    USER = "user"
    ASSISTANT = "assistant"


class RequestState(str, Enum):
    """控制器状态。

    - IDLE: 可以接受新的提交。
    - PENDING: 已有一个补全请求在途（即 AWAITING_RESPONSE）。
    """

    IDLE = "idle"
    PENDING = "pending"


def _new_message_id() -> str:
    return f"m-{uuid4().hex}"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Message:
    """一条会话消息。

    - id: 会话内唯一的不透明标识。
    - content: 纯文本内容（用户输入已去除首尾空白）。
    - origin: 消息来源。
    - created_at: 创建时间（UTC），仅用于展示与序列化。
    """

    content: str
    origin: Origin
    id: str = field(default_factory=_new_message_id)
    created_at: datetime = field(default_factory=_utcnow)

    @classmethod
    def user(cls, content: str) -> "Message":
        return cls(content=content, origin=Origin.USER)

    @classmethod
    def assistant(cls, content: str) -> "Message":
        return cls(content=content, origin=Origin.ASSISTANT)

    @property
    def is_user(self) -> bool:
        return self.origin is Origin.USER

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "content": self.content,
            "origin": self.origin.value,
            "created_at": self.created_at.isoformat(),
        }
