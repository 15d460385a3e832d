from typing import List
from .context import optimize_context
from .schema import Message

class Memory:
    def __init__(self):
        self.messages: List[Message] = []

    def add_user(self, text: str) -> Message:
        msg = Message.create(text, "user")
        self.messages.append(msg)
        return msg

    def add_assistant(self, text: str) -> Message:
        msg = Message.create(text, "assistant")
        self.messages.append(msg)
        return msg

    def last(self, n: int = 5) -> List[Message]:
        return self.messages[-n:] if n > 0 else []

    def history(self) -> List[Message]:
        return list(self.messages)

    def window(self, token_budget: int) -> List[Message]:
        return optimize_context(self.messages, token_budget)

    def clear(self):
        self.messages.clear()

    def __len__(self) -> int:
        return len(self.messages)
