"""提交闸门。

在用户输入变成补全请求之前做准入判定：

1. 去除输入首尾空白。
2. 空输入拒绝。
3. 已有请求在途（PENDING）拒绝。

这是整个系统里唯一保证“同一时刻最多一个在途请求”的判定逻辑，
本身是纯函数，不修改任何状态。
"""

from dataclasses import dataclass
from typing import Literal, Optional

from .models import RequestState


RejectReason = Literal["EMPTY_INPUT", "REQUEST_PENDING"]


@dataclass(frozen=True)
class AdmitResult:
    """闸门判定结果。

    - admitted: 是否准入。
    - text: 准入时为去除首尾空白后的输入，拒绝时为 None。
    - reason: 拒绝原因，仅用于日志。
    """

    admitted: bool
    text: Optional[str] = None
    reason: Optional[RejectReason] = None


def try_admit(raw_input: str, state: RequestState) -> AdmitResult:
    """根据原始输入与当前状态决定是否准入。"""

    text = (raw_input or "").strip()
    if not text:
        return AdmitResult(admitted=False, reason="EMPTY_INPUT")
    if state is RequestState.PENDING:
        return AdmitResult(admitted=False, reason="REQUEST_PENDING")
    return AdmitResult(admitted=True, text=text)
