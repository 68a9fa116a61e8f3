"""补全失败时展示给用户的文案。"""

from typing import Dict

from chat_core.domain.exceptions import CompletionError, CompletionErrorKind


ERROR_TEMPLATES: Dict[CompletionErrorKind, str] = {
    "NETWORK": "Error: could not reach the completion service (network error).",
    "RATE_LIMITED": "Error: too many requests. Please wait a moment before trying again.",
    "SERVER_ERROR": "Error: the completion service answered with HTTP {status} (server error).",
    "MALFORMED_RESPONSE": (
        "Error: the completion service sent a reply that could not be read (malformed response)."
    ),
    "MISSING_CREDENTIAL": "Error: no API key is configured (missing credential).",
}

UNEXPECTED_ERROR_MESSAGE = "Error: something went wrong while contacting the completion service."


def describe_error(err: CompletionError) -> str:
    """把 CompletionError 渲染为一条助手消息的正文。"""

    template = ERROR_TEMPLATES.get(getattr(err, "kind", None), UNEXPECTED_ERROR_MESSAGE)
    return template.format(status=err.http_status)
