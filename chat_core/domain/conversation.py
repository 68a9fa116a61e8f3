from typing import Iterator, List, Optional, Tuple

from .models import Message


class ConversationLog:
    """只追加的会话记录，插入顺序即对话顺序。

    日志只由 ConversationController 持有和修改；前端通过 snapshot()
    拿到一份只读元组，之后的追加不会影响已经拿到的快照。
    """

    def __init__(self) -> None:
        self._messages: List[Message] = []

    def append(self, message: Message) -> None:
        self._messages.append(message)

    def snapshot(self) -> Tuple[Message, ...]:
        return tuple(self._messages)

    def last(self) -> Optional[Message]:
        return self._messages[-1] if self._messages else None

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self.snapshot())
