"""领域层模型与协议。

包含：
- models: Message / Origin / RequestState 等值类型。
- conversation: 只追加的 ConversationLog。
- gate: 提交前的 RequestGate 判定。
- exceptions: 业务异常类型定义。
"""
