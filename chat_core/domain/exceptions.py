"""统一业务异常模型。

所有跨模块抛出的业务级错误都应该继承自 BusinessError，
便于在控制器或 UI 层做统一捕获与用户提示。

补全调用相关的错误统一继承自 CompletionError，并通过 kind
区分五种情况，控制器据此选择提示文案。
"""

from typing import Literal, Optional


CompletionErrorKind = Literal[
    "NETWORK",
    "RATE_LIMITED",
    "SERVER_ERROR",
    "MALFORMED_RESPONSE",
    "MISSING_CREDENTIAL",
]


class BusinessError(Exception):
    """业务异常基类。

    Attributes:
        code: 机器可读错误码（如 "RATE_LIMIT"）。
        message: 错误描述，供日志使用。
        http_status: 对应的 HTTP 状态码，默认 400。
        extra: 其他补充字段（例如 provider、elapsed 等）。
    """

    def __init__(self, code: str, message: str, http_status: int = 400, **extra):
        self.code = code
        self.message = message
        self.http_status = http_status
        self.extra = extra
        super().__init__(message)


class CompletionError(BusinessError):
    """一次补全调用失败。子类通过 kind 标识失败类型。"""

    kind: CompletionErrorKind


class NetworkError(CompletionError):
    """网络层错误，例如 DNS 失败、连接被拒、超时等，请求未得到响应。"""

    kind = "NETWORK"


class RateLimitError(CompletionError):
    """Provider 返回 429。需要提示用户稍后再试。"""

    kind = "RATE_LIMITED"


class ServerError(CompletionError):
    """Provider 返回 429 以外的非 200 状态码。"""

    kind = "SERVER_ERROR"

    @property
    def status(self) -> Optional[int]:
        return self.http_status


class MalformedResponseError(CompletionError):
    """状态码 200，但响应体不是预期的 JSON 结构。"""

    kind = "MALFORMED_RESPONSE"


class MissingCredentialError(CompletionError):
    """未配置 API 密钥，请求不会发出。"""

    kind = "MISSING_CREDENTIAL"


class ValidationError(BusinessError):
    """参数或配置校验失败。"""
