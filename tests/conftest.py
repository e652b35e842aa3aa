"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

import pytest

from calorie_tracker.config import Settings
from calorie_tracker.domain.foods import FoodEntry, MealType
from calorie_tracker.domain.vision import ImageUpload
from calorie_tracker.services.advisor import AdvisoryClient, AdvisoryService
from calorie_tracker.services.store import Store
from calorie_tracker.services.tracker import TrackerService
from calorie_tracker.services.vision import (
    ImageHostClient,
    ImageRecognitionPipeline,
    VisionClient,
)

TODAY = date(2024, 6, 12)


@dataclass
class InMemoryStore(Store):
    """In-memory key-value store for tests."""

    values: dict[str, object] = field(default_factory=dict)
    saves: list[str] = field(default_factory=list)

    def load(self, key: str) -> object | None:
        return self.values.get(key)

    def save(self, key: str, value: object) -> None:
        self.values[key] = value
        self.saves.append(key)


@dataclass
class FakeAdvisoryClient(AdvisoryClient):
    """Fake text generation client returning a fixed payload."""

    payload: dict[str, object] = field(
        default_factory=lambda: {
            "candidates": [
                {"content": {"parts": [{"text": "Eat more vegetables."}]}}
            ]
        }
    )
    error: Exception | None = None
    prompts: list[str] = field(default_factory=list)

    async def generate(self, *, model: str, prompt: str) -> dict[str, object]:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.payload


@dataclass
class FakeImageHost(ImageHostClient):
    """Fake image host that records uploads."""

    url: str = "https://i.example.com/meal.jpg"
    error: Exception | None = None
    uploads: list[ImageUpload] = field(default_factory=list)

    async def upload(self, image: ImageUpload) -> str:
        self.uploads.append(image)
        if self.error is not None:
            raise self.error
        return self.url


@dataclass
class FakeVisionClient(VisionClient):
    """Fake vision client returning fixed message content."""

    content: str = (
        '{"items": [{"item_name": "Grilled chicken", "total_calories": 330.4, '
        '"total_protein": 62, "total_carbs": 0, "total_fats": 7.2}, '
        '{"item_name": "Rice", "total_calories": 205, "total_protein": 4.3, '
        '"total_carbs": 45, "total_fats": 0.4}]}'
    )
    calls: list[str] = field(default_factory=list)

    async def complete(self, *, model: str, image_url: str, prompt: str) -> str:
        self.calls.append(image_url)
        return self.content


def make_entry(  # noqa: PLR0913
    *,
    entry_id: int | None = None,
    name: str = "Apple",
    calories: float = 95,
    quantity: float = 1,
    meal: MealType = MealType.BREAKFAST,
    day: date = TODAY,
) -> FoodEntry:
    return FoodEntry(
        id=entry_id,
        name=name,
        calories=calories,
        quantity=quantity,
        meal=meal,
        date=day,
    )


def jpeg_upload(size: int = 1024, content_type: str = "image/jpeg") -> ImageUpload:
    return ImageUpload(
        filename="meal.jpg",
        content_type=content_type,
        data=b"\xff\xd8\xff" + b"\x00" * max(size - 3, 0),
    )


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        gemini_api_key="gemini-key",
        groq_api_key="groq-key",
        imgbb_api_key="imgbb-key",
        data_dir=tmp_path / "data",
    )


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def tracker(store: InMemoryStore) -> TrackerService:
    return TrackerService.load(store, today=lambda: TODAY)


@pytest.fixture
def advisory_client() -> FakeAdvisoryClient:
    return FakeAdvisoryClient()


@pytest.fixture
def advisory_service(advisory_client: FakeAdvisoryClient) -> AdvisoryService:
    return AdvisoryService(client=advisory_client, model="gemini-pro")


@pytest.fixture
def image_host() -> FakeImageHost:
    return FakeImageHost()


@pytest.fixture
def vision_client() -> FakeVisionClient:
    return FakeVisionClient()


@pytest.fixture
def pipeline(
    image_host: FakeImageHost, vision_client: FakeVisionClient
) -> ImageRecognitionPipeline:
    return ImageRecognitionPipeline(
        image_host=image_host,
        vision_client=vision_client,
        model="llama-3.2-90b-vision-preview",
    )
