"""Provider 抽象接口。

ConversationController 不直接依赖具体厂商的 HTTP 细节，而是依赖此协议：

- 每个厂商实现一个 CompletionClient（如 OpenAIClient）。
- 负责：把单轮 prompt 转成具体 API 请求，并把响应解析为回复文本，
  失败时抛出 CompletionError 的某个子类。

客户端本身不保存会话状态，同一实例可以被反复调用。
"""

from typing import Protocol


class CompletionClient(Protocol):
    """LLM 补全客户端协议。

    实现者需要提供：
    - name: Provider 名称，用于日志。
    - complete(prompt, credential): 执行一次补全调用，成功返回去除首尾空白的
      回复文本，失败抛出 CompletionError。
    """

    name: str

    async def complete(self, prompt: str, credential: str) -> str:
        ...
