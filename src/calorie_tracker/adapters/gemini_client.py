"""Gemini generateContent API client."""

from dataclasses import dataclass

import httpx

from calorie_tracker.services.advisor import AdvisoryClient


@dataclass
class HttpxGeminiClient(AdvisoryClient):
    """HTTPX-backed Gemini text generation client."""

    api_key: str
    base_url: str
    http_client: httpx.AsyncClient
    timeout: float = 30.0

    @classmethod
    def create(
        cls, api_key: str, base_url: str, timeout: float = 30.0
    ) -> "HttpxGeminiClient":
        """Create a Gemini client with a managed httpx session."""
        return cls(
            api_key=api_key,
            base_url=base_url,
            http_client=httpx.AsyncClient(),
            timeout=timeout,
        )

    async def generate(self, *, model: str, prompt: str) -> dict[str, object]:
        """Send a single text prompt and return the raw response body."""
        url = f"{self.base_url}/models/{model}:generateContent"
        response = await self.http_client.post(
            url,
            params={"key": self.api_key},
            json={"contents": [{"parts": [{"text": prompt}]}]},
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
