"""OpenAI Provider 适配器。

本模块负责：

1. 接收单轮 prompt 与调用方提供的密钥。
2. 将其转换为 OpenAI Chat Completions 的 HTTP 请求格式。
3. 调用 HTTP 接口并把网络/限流/服务端异常归类为 CompletionError。
4. 用带校验的响应模型解析 choices[0].message.content，结构不符时整体失败。

每次调用只发一次请求，不做重试；超时沿用 settings.http_timeout。
"""

from typing import Any, Dict, List

import httpx
from pydantic import BaseModel, Field, StrictStr
from pydantic import ValidationError as PydanticValidationError

from chat_core.domain.exceptions import (
    MalformedResponseError,
    MissingCredentialError,
    NetworkError,
    RateLimitError,
    ServerError,
    ValidationError,
)
from chat_core.providers.registry import OPENAI_CONFIG, ModelConfig


class _CompletionMessage(BaseModel):
    content: StrictStr


class _CompletionChoice(BaseModel):
    message: _CompletionMessage


class _CompletionBody(BaseModel):
    """响应体中唯一关心的部分；其余字段忽略。"""

    choices: List[Any] = Field(min_length=1)


class OpenAIClient:
    """OpenAI 提供方客户端实现。

    - name: Provider 名称（供日志/调试使用）。
    - complete: 对外统一调用入口，返回回复文本。
    """

    name = "openai"

    def __init__(self, settings, model: str = "chat"):
        # Settings 里包含 base_url、超时等配置；密钥在调用时传入
        self._settings = settings
        try:
            self._model_cfg = OPENAI_CONFIG.models[model]
        except KeyError as e:
            raise ValidationError(code="UNKNOWN_MODEL", message=f"Unknown model: {model!r}") from e

    @property
    def model(self) -> ModelConfig:
        return self._model_cfg

    async def complete(self, prompt: str, credential: str) -> str:
        """执行一次非流式补全调用。

        步骤：
        1. 检查密钥是否存在。
        2. 构造 HTTP 请求 payload。
        3. 发送请求并归类网络错误/限流/服务端错误。
        4. 校验响应结构并取出回复文本。
        """

        if not credential:
            raise MissingCredentialError(code="MISSING_API_KEY", message="OPENAI_API_KEY not set")
        payload = self._build_payload(prompt)
        base = getattr(self._settings, "openai_base_url", None) or OPENAI_CONFIG.base_url
        try:
            async with httpx.AsyncClient(timeout=self._settings.http_timeout, trust_env=False) as client:
                resp = await client.post(
                    f"{base.rstrip('/')}/chat/completions",
                    json=payload,
                    headers={
                        "Authorization": f"Bearer {credential}",
                        "Content-Type": "application/json",
                    },
                )
        except httpx.RequestError as e:
            # 网络错误：DNS 失败、连接超时等
            raise NetworkError(
                code="NETWORK_ERROR",
                message=str(e) or type(e).__name__,
                http_status=0,
            ) from e
        if resp.status_code == 429:
            raise RateLimitError(code="RATE_LIMIT", message="OpenAI rate limit", http_status=429)
        if resp.status_code != 200:
            raise ServerError(code="API_ERROR", message=resp.text[:500], http_status=resp.status_code)
        return self._parse_response(resp.content)

    def _build_payload(self, prompt: str) -> Dict[str, Any]:
        """构造单轮对话请求 JSON。"""

        return {
            "model": self._model_cfg.provider_model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": self._model_cfg.max_tokens,
        }

    @staticmethod
    def _parse_response(body: bytes) -> str:
        """把原始响应体解析为回复文本。

        非 JSON、缺少 choices、choices 为空或 choices[0] 的 content 不是字符串
        都归为 MalformedResponseError，不返回部分结果。
        """

        try:
            parsed = _CompletionBody.model_validate_json(body)
            # 只校验 choices[0]，其余候选忽略
            first = _CompletionChoice.model_validate(parsed.choices[0])
        except PydanticValidationError as e:
            raise MalformedResponseError(
                code="MALFORMED_RESPONSE",
                message=f"Unexpected completion payload ({e.error_count()} errors)",
                http_status=200,
            ) from e
        return first.message.content.strip()
