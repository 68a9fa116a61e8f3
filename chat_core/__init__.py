"""Chat Core 顶层包。

该包提供单会话 LLM 聊天客户端的核心实现，
包括配置加载、领域模型、请求闸门、Provider 适配、
会话控制器与简单的桌面/控制台前端。
"""

from chat_core.domain.models import Message, Origin, RequestState
from chat_core.session.controller import ConversationController

__all__ = ["ConversationController", "Message", "Origin", "RequestState"]
