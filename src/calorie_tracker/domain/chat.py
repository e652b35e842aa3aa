"""Domain models for the nutrition assistant chat."""

from dataclasses import dataclass
from enum import Enum


class ChatRole(str, Enum):
    """Author of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class ChatMessage:
    """Single message in a chat session."""

    id: int
    role: ChatRole
    text: str
