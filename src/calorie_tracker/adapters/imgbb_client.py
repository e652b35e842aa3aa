"""ImgBB image hosting client."""

import logging
from dataclasses import dataclass

import httpx

from calorie_tracker.domain.vision import ImageUpload
from calorie_tracker.services.vision import ImageHostClient

_logger = logging.getLogger(__name__)


@dataclass
class HttpxImgbbClient(ImageHostClient):
    """Image host client using httpx multipart uploads."""

    api_key: str
    upload_url: str
    http_client: httpx.AsyncClient
    timeout: float = 30.0

    @classmethod
    def create(
        cls, api_key: str, upload_url: str, timeout: float = 30.0
    ) -> "HttpxImgbbClient":
        """Create an ImgBB client with a managed httpx session."""
        return cls(
            api_key=api_key,
            upload_url=upload_url,
            http_client=httpx.AsyncClient(),
            timeout=timeout,
        )

    async def upload(self, image: ImageUpload) -> str:
        """Upload image bytes and return the hosted URL."""
        response = await self.http_client.post(
            self.upload_url,
            params={"key": self.api_key},
            files={"image": (image.filename, image.data, image.content_type)},
            timeout=self.timeout,
        )
        if response.is_error:
            _logger.warning("ImgBB upload error: %s", response.text)
            raise RuntimeError(
                "Failed to upload image: "
                f"{response.status_code} {response.reason_phrase}"
            )
        payload = response.json()
        if not payload.get("success"):
            error = payload.get("error") or {}
            message = error.get("message") if isinstance(error, dict) else None
            raise RuntimeError(message or "Image upload failed")
        url = (payload.get("data") or {}).get("url")
        if not isinstance(url, str) or not url:
            raise RuntimeError("Image upload response did not include a URL")
        return url

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
