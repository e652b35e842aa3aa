"""Chat session with the nutrition assistant."""

import itertools
from dataclasses import dataclass, field

from calorie_tracker.domain.chat import ChatMessage, ChatRole
from calorie_tracker.services.advisor import AdvisoryService
from calorie_tracker.services.tracker import TrackerService

GREETING = (
    "Hi! I'm your nutrition assistant. I can help you with calorie tracking, "
    "meal planning, and nutrition advice. How can I help you today?"
)


@dataclass
class ChatSession:
    """In-memory conversation; messages are never persisted."""

    advisor: AdvisoryService
    tracker: TrackerService
    messages: list[ChatMessage] = field(default_factory=list)
    is_loading: bool = False
    _ids: itertools.count = field(default_factory=lambda: itertools.count(1))

    def __post_init__(self) -> None:
        if not self.messages:
            self._append(ChatRole.ASSISTANT, GREETING)

    async def send(self, text: str) -> ChatMessage | None:
        """Post a user question and append the assistant's reply."""
        question = text.strip()
        if not question or self.is_loading:
            return None
        self._append(ChatRole.USER, question)
        self.is_loading = True
        try:
            answer = await self.advisor.ask(question, self.tracker.advisory_context())
        finally:
            self.is_loading = False
        return self._append(ChatRole.ASSISTANT, answer)

    def _append(self, role: ChatRole, text: str) -> ChatMessage:
        message = ChatMessage(id=next(self._ids), role=role, text=text)
        self.messages.append(message)
        return message
