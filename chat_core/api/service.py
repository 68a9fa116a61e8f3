"""对外 API 服务模块。

提供简化的函数接口供上层应用（控制台、脚本）调用。
"""

from typing import Any, Dict, List, Optional

from chat_core.config.settings import settings
from chat_core.infrastructure.logging.logger import logger
from chat_core.providers import create_provider
from chat_core.session.controller import ConversationController, RenderCallback


_controller: Optional[ConversationController] = None


def get_default_controller(render: Optional[RenderCallback] = None) -> ConversationController:
    """获取默认的会话控制器实例（单例）。

    render 只在首次创建时生效。
    """
    global _controller
    if _controller is None:
        _controller = ConversationController(
            client=create_provider(),
            credential=settings.openai_api_key,
            render=render,
        )
    return _controller


def reset_default_controller() -> None:
    """丢弃单例，下次调用 get_default_controller 时重新创建。"""
    global _controller
    _controller = None


async def send_message(text: str) -> Optional[Dict[str, Any]]:
    """提交一条消息并等待回复。

    Args:
        text: 用户输入

    Returns:
        包含用户消息、助手消息与当前状态的字典；输入被拒绝时返回 None。
    """
    controller = get_default_controller()
    try:
        if not controller.submit(text):
            return None
        history = controller.snapshot()
        user_msg = history[-1]
        await controller.wait_idle()
    except Exception as e:
        logger.error(f"Send failed: {e}", extra={"extra": {"error": str(e)}})
        raise

    history = controller.snapshot()
    assistant_msg = history[-1]
    return {
        "user_message": user_msg.to_dict(),
        "assistant_message": assistant_msg.to_dict(),
        "state": controller.state.value,
    }


def get_history() -> List[Dict[str, Any]]:
    """获取当前会话的所有消息。

    Returns:
        消息列表，每项包含 id, content, origin, created_at
    """
    controller = get_default_controller()
    return [m.to_dict() for m in controller.snapshot()]
