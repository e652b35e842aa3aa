"""Food photo recognition: upload, analyze, then confirm into the ledger."""

import asyncio
import json
import logging
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Protocol

from pydantic import ValidationError

from calorie_tracker.domain.foods import FoodEntry, MealType
from calorie_tracker.domain.vision import DetectedItem, DetectionResult, ImageUpload
from calorie_tracker.services.stats import round_half_up

MAX_IMAGE_BYTES = 32 * 1024 * 1024
PROGRESS_RESET_DELAY_SECONDS = 1.0

VISION_PROMPT = (
    "Give calories of each item in this image in this below JSON format only\n"
    " {items:[{item_name:name of item, total_calories:in kcal, "
    "total_protein:in gm, total_carbs:in gm, total_fats:in gm},...]}"
)

_logger = logging.getLogger(__name__)


class PipelineStatus(str, Enum):
    """Lifecycle of a single image analysis."""

    IDLE = "idle"
    UPLOADING = "uploading"
    ANALYZING = "analyzing"
    COMPLETED = "completed"
    FAILED = "failed"


class ImageHostClient(Protocol):
    """Interface for image hosting."""

    async def upload(self, image: ImageUpload) -> str:
        """Upload an image and return its public URL."""


class VisionClient(Protocol):
    """Interface for vision model completions."""

    async def complete(self, *, model: str, image_url: str, prompt: str) -> str:
        """Return the text content of the model's reply."""


class PipelineError(RuntimeError):
    """Failure with a message suitable for display."""


@dataclass
class ImageRecognitionPipeline:
    """Tracks one selected image through upload and analysis."""

    image_host: ImageHostClient
    vision_client: VisionClient
    model: str
    default_meal: MealType = MealType.LUNCH
    status: PipelineStatus = PipelineStatus.IDLE
    progress: int = 0
    error: str | None = None
    image: ImageUpload | None = None
    detected_items: list[DetectedItem] = field(default_factory=list)

    @property
    def is_analyzing(self) -> bool:
        """True while a request is in flight."""
        return self.status in {PipelineStatus.UPLOADING, PipelineStatus.ANALYZING}

    def select(self, image: ImageUpload) -> None:
        """Select a new image, discarding earlier results."""
        self.image = image
        self.error = None
        self.detected_items = []
        self.progress = 0
        self.status = PipelineStatus.IDLE

    async def analyze(self) -> list[DetectedItem]:
        """Run upload and analysis for the selected image; never raises."""
        if self.image is None or self.is_analyzing:
            return []
        image = self.image
        self.error = None
        self.progress = 0
        try:
            _validate(image)
            self._advance(PipelineStatus.UPLOADING, 30)
            _logger.info(
                "Uploading image name=%s size=%s type=%s",
                image.filename,
                image.size,
                image.content_type,
            )
            image_url = await self._upload(image)
            self._advance(PipelineStatus.ANALYZING, 70)
            result = await self._analyze(image_url)
        except PipelineError as exc:
            self._fail(str(exc))
            return []
        self.detected_items = result.items
        self._advance(PipelineStatus.COMPLETED, 100)
        _logger.info("Image analysis detected %s items", len(result.items))
        self._schedule_progress_reset()
        return self.detected_items

    def promote(
        self, item: DetectedItem, today: date, meal: MealType | None = None
    ) -> FoodEntry:
        """Turn a detected item into a ledger entry for one serving."""
        return FoodEntry(
            id=None,
            name=item.name,
            calories=round_half_up(item.total_calories),
            quantity=1,
            meal=meal or self.default_meal,
            date=today,
            protein=item.protein,
            carbs=item.carbs,
            fats=item.fats,
        )

    def add_all(self, today: date, meal: MealType | None = None) -> list[FoodEntry]:
        """Promote every detected item and clear the pipeline."""
        entries = [self.promote(item, today, meal) for item in self.detected_items]
        self.detected_items = []
        self.image = None
        self.progress = 0
        self.status = PipelineStatus.IDLE
        return entries

    async def _upload(self, image: ImageUpload) -> str:
        try:
            return await self.image_host.upload(image)
        except Exception as exc:
            raise PipelineError(f"Image upload failed: {exc}") from exc

    async def _analyze(self, image_url: str) -> DetectionResult:
        try:
            content = await self.vision_client.complete(
                model=self.model, image_url=image_url, prompt=VISION_PROMPT
            )
            return _parse_detection(content)
        except Exception as exc:
            raise PipelineError(f"AI analysis failed: {exc}") from exc

    def _advance(self, status: PipelineStatus, progress: int) -> None:
        self.status = status
        self.progress = progress

    def _fail(self, message: str) -> None:
        _logger.warning("Image analysis failed: %s", message, exc_info=True)
        self.status = PipelineStatus.FAILED
        self.error = message
        self.progress = 0

    def _schedule_progress_reset(self) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self.progress = 0
            return
        loop.call_later(PROGRESS_RESET_DELAY_SECONDS, self._reset_progress)

    def _reset_progress(self) -> None:
        if self.status == PipelineStatus.COMPLETED:
            self.progress = 0


def _validate(image: ImageUpload) -> None:
    if image.size > MAX_IMAGE_BYTES:
        raise PipelineError(
            "Image file is too large. Please use an image smaller than 32MB."
        )
    if not image.content_type.startswith("image/"):
        raise PipelineError("Please select a valid image file.")


def _parse_detection(content: str) -> DetectionResult:
    try:
        raw = json.loads(content)
    except (TypeError, json.JSONDecodeError) as exc:
        raise RuntimeError("Failed to parse AI response") from exc
    try:
        return DetectionResult.model_validate(raw)
    except ValidationError as exc:
        raise RuntimeError("Failed to parse AI response") from exc


def image_from_path(path: Path) -> ImageUpload:
    """Build an upload from a file, sniffing its type from the content."""
    data = path.read_bytes()
    return ImageUpload(
        filename=path.name, content_type=detect_mime_type(data), data=data
    )


def detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    if image_bytes[:6] in {b"GIF87a", b"GIF89a"}:
        return "image/gif"
    return "application/octet-stream"
