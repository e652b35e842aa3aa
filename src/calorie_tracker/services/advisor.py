"""Nutrition advice from a text generation model."""

import logging
from dataclasses import dataclass, field
from typing import Protocol

from calorie_tracker.domain.foods import FoodEntry

NO_ANSWER_FALLBACK = (
    "I'm sorry, I couldn't process your request right now. Please try again."
)
CONNECTION_FALLBACK = (
    "I'm sorry, I'm having trouble connecting right now. Please try again later."
)

_logger = logging.getLogger(__name__)


class AdvisoryClient(Protocol):
    """Interface for text generation requests."""

    async def generate(self, *, model: str, prompt: str) -> dict[str, object]:
        """Return the raw generation response body."""


@dataclass(frozen=True)
class AdvisoryContext:
    """Snapshot of the user's progress sent along with a question."""

    goal: int
    today_total: float
    remaining: float
    weekly_average: float
    recent_entries: list[FoodEntry] = field(default_factory=list)


@dataclass
class AdvisoryService:
    """Builds prompts and turns any failure into a fallback reply."""

    client: AdvisoryClient
    model: str

    async def ask(self, question: str, context: AdvisoryContext) -> str:
        """Answer a nutrition question; never raises."""
        prompt = build_prompt(question, context)
        try:
            payload = await self.client.generate(model=self.model, prompt=prompt)
        except Exception:
            _logger.exception("Advisory request failed")
            return CONNECTION_FALLBACK
        text = _first_candidate_text(payload)
        if text is None:
            _logger.warning("Advisory response had no candidate text")
            return NO_ANSWER_FALLBACK
        return text


def build_prompt(question: str, context: AdvisoryContext) -> str:
    """Serialize the progress snapshot and the question into one prompt."""
    recent = ", ".join(
        f"{entry.name} ({_fmt(entry.calories_contributed)} cal)"
        for entry in context.recent_entries
    )
    return (
        "You are a helpful nutrition and calorie tracking assistant.\n\n"
        "User's current nutrition data:\n"
        f"- Daily calorie goal: {context.goal}\n"
        f"- Today's calories consumed: {_fmt(context.today_total)}\n"
        f"- Remaining calories: {_fmt(context.remaining)}\n"
        f"- Weekly average: {_fmt(context.weekly_average)}\n"
        f"- Recent foods logged: {recent or 'none'}\n\n"
        f"User question: {question}\n\n"
        "Please provide helpful, accurate nutrition advice. "
        "Keep responses concise but informative. "
        "If the user asks about their current progress, use the data provided above. "
        "Focus on nutrition, calorie tracking, healthy eating, "
        "and meal planning advice."
    )


def _first_candidate_text(payload: object) -> str | None:
    """Extract candidates[0].content.parts[0].text if present."""
    if not isinstance(payload, dict):
        return None
    candidates = payload.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return None
    first = candidates[0]
    content = first.get("content") if isinstance(first, dict) else None
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
        return None
    text = parts[0].get("text")
    if not isinstance(text, str) or not text:
        return None
    return text


def _fmt(value: float) -> str:
    return f"{value:.0f}" if float(value).is_integer() else f"{value:.1f}"
