"""会话控制器。

把 RequestGate、ConversationLog 与 CompletionClient 串起来，
实现消息发送的完整生命周期：

    IDLE --submit(text)--> PENDING --resolve(ok | error)--> IDLE

所有日志追加与状态切换都发生在同一个 asyncio 事件循环上；
网络调用作为该循环上的任务运行，只挂起它自己的后续逻辑。
同一时刻最多一个在途请求，由闸门和 PENDING 状态共同保证，
请求一旦发出不可取消。
"""

import asyncio
import logging
import time
from typing import Any, Callable, Dict, Optional, Tuple
from uuid import uuid4

from chat_core.domain.conversation import ConversationLog
from chat_core.domain.exceptions import CompletionError
from chat_core.domain.gate import try_admit
from chat_core.domain.models import Message, RequestState
from chat_core.infrastructure.logging.logger import logger
from chat_core.providers.base import CompletionClient
from chat_core.session.messages import UNEXPECTED_ERROR_MESSAGE, describe_error


RenderCallback = Callable[[Tuple[Message, ...], bool], None]


class ConversationController:
    """单会话控制器，是会话日志与请求状态的唯一修改入口。

    Args:
        client: 补全客户端。
        credential: API 密钥，整个会话期间不变，只在调用时传给 client。
        render: 可选的渲染回调 render(history, pending)，每次状态变化后调用。
    """

    def __init__(
        self,
        client: CompletionClient,
        credential: Optional[str] = None,
        render: Optional[RenderCallback] = None,
    ):
        self._client = client
        self._credential = credential or ""
        self._render = render
        self._history = ConversationLog()
        self._state = RequestState.IDLE
        self._inflight: Optional["asyncio.Task[None]"] = None
        self._session_id = f"s-{uuid4().hex}"

    @property
    def state(self) -> RequestState:
        return self._state

    @property
    def pending(self) -> bool:
        return self._state is RequestState.PENDING

    def snapshot(self) -> Tuple[Message, ...]:
        return self._history.snapshot()

    def submit(self, text: str) -> bool:
        """提交一条用户输入。

        准入时同步追加用户消息、切换到 PENDING 并调度补全任务，返回 True。
        空输入或已有请求在途时什么都不做，返回 False。
        必须在事件循环内调用。
        """

        result = try_admit(text, self._state)
        if not result.admitted:
            self._log(logging.INFO, "Submission rejected", reason=result.reason)
            return False

        loop = asyncio.get_running_loop()
        message = Message.user(result.text)
        self._history.append(message)
        self._state = RequestState.PENDING
        self._log(
            logging.INFO,
            "Submission admitted",
            message_id=message.id,
            content=message.content,
        )
        self._notify()
        self._inflight = loop.create_task(self._resolve(message))
        return True

    async def wait_idle(self) -> None:
        """等待当前在途请求结束；没有在途请求时立即返回。"""

        task = self._inflight
        if task is not None:
            await task

    async def _resolve(self, user_message: Message) -> None:
        start_time = time.monotonic()
        outcome = "ok"
        try:
            content = await self._client.complete(user_message.content, self._credential)
        except CompletionError as e:
            outcome = getattr(e, "kind", e.code)
            content = describe_error(e)
            self._log(
                logging.WARNING,
                "Completion failed",
                message_id=user_message.id,
                kind=outcome,
                code=e.code,
                http_status=e.http_status,
            )
        except Exception:
            # 客户端实现之外的异常同样不能中断会话
            outcome = "UNEXPECTED"
            content = UNEXPECTED_ERROR_MESSAGE
            logger.exception(
                "Completion raised an unexpected error",
                extra={"extra": {"session_id": self._session_id, "message_id": user_message.id}},
            )

        reply = Message.assistant(content)
        self._history.append(reply)
        self._state = RequestState.IDLE
        self._log(
            logging.INFO,
            "Completion resolved",
            provider=getattr(self._client, "name", "unknown"),
            message_id=reply.id,
            outcome=outcome,
            elapsed_seconds=round(time.monotonic() - start_time, 2),
        )
        self._notify()

    def _notify(self) -> None:
        if self._render is None:
            return
        try:
            self._render(self._history.snapshot(), self.pending)
        except Exception:
            logger.exception(
                "Render callback failed",
                extra={"extra": {"session_id": self._session_id}},
            )

    def _log(self, level: int, message: str, **fields: Any) -> None:
        payload: Dict[str, Any] = {"session_id": self._session_id, "state": self._state.value}
        payload.update(fields)
        logger.log(level, message, extra={"extra": payload})
