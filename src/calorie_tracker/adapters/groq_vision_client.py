"""Groq chat completions client for food photo analysis."""

from dataclasses import dataclass

from openai import APIStatusError, AsyncOpenAI

from calorie_tracker.services.vision import VisionClient


@dataclass
class GroqVisionClient(VisionClient):
    """Vision client backed by Groq's OpenAI-compatible API."""

    client: AsyncOpenAI

    @classmethod
    def create(
        cls, api_key: str, base_url: str, timeout: float = 30.0
    ) -> "GroqVisionClient":
        """Create a Groq vision client."""
        return cls(
            client=AsyncOpenAI(
                api_key=api_key, base_url=base_url, timeout=timeout, max_retries=0
            )
        )

    async def complete(self, *, model: str, image_url: str, prompt: str) -> str:
        """Ask the model about an image and return the raw message content."""
        try:
            response = await self.client.chat.completions.create(
                model=model,
                messages=[
                    {
                        "role": "user",
                        "content": [
                            {"type": "text", "text": prompt},
                            {"type": "image_url", "image_url": {"url": image_url}},
                        ],
                    }
                ],
                temperature=1,
                max_completion_tokens=1024,
                top_p=1,
                stream=False,
                response_format={"type": "json_object"},
            )
        except APIStatusError as exc:
            raise RuntimeError(f"Failed to analyze image: {exc.status_code}") from exc
        choices = getattr(response, "choices", None)
        if not choices or choices[0].message is None:
            raise RuntimeError("Invalid response from AI service")
        content = choices[0].message.content
        if content is None:
            raise RuntimeError("Invalid response from AI service")
        return content

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
