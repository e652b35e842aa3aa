"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from functools import partial

from calorie_tracker.adapters.gemini_client import HttpxGeminiClient
from calorie_tracker.adapters.groq_vision_client import GroqVisionClient
from calorie_tracker.adapters.imgbb_client import HttpxImgbbClient
from calorie_tracker.adapters.json_file_store import JsonFileStore
from calorie_tracker.app_logging import configure_logging
from calorie_tracker.config import Settings, today_in
from calorie_tracker.domain.foods import MealType
from calorie_tracker.services.advisor import AdvisoryService
from calorie_tracker.services.catalog import FoodCatalog
from calorie_tracker.services.chat import ChatSession
from calorie_tracker.services.store import Store
from calorie_tracker.services.tracker import TrackerService
from calorie_tracker.services.vision import ImageRecognitionPipeline


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    store: Store
    tracker: TrackerService
    catalog: FoodCatalog
    advisory_service: AdvisoryService
    chat_session: ChatSession
    image_pipeline: ImageRecognitionPipeline
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    configure_logging(resolved_settings.log_level.upper())
    timeout = resolved_settings.http_timeout_seconds
    store = JsonFileStore(resolved_settings.data_dir)
    tracker = TrackerService.load(
        store,
        today=partial(today_in, resolved_settings.timezone),
        default_goal=resolved_settings.daily_goal_default,
    )
    gemini_client = HttpxGeminiClient.create(
        api_key=resolved_settings.gemini_api_key,
        base_url=resolved_settings.gemini_base_url,
        timeout=timeout,
    )
    advisory_service = AdvisoryService(
        client=gemini_client, model=resolved_settings.gemini_model
    )
    imgbb_client = HttpxImgbbClient.create(
        api_key=resolved_settings.imgbb_api_key,
        upload_url=resolved_settings.imgbb_upload_url,
        timeout=timeout,
    )
    groq_client = GroqVisionClient.create(
        api_key=resolved_settings.groq_api_key,
        base_url=resolved_settings.groq_base_url,
        timeout=timeout,
    )
    image_pipeline = ImageRecognitionPipeline(
        image_host=imgbb_client,
        vision_client=groq_client,
        model=resolved_settings.groq_model,
        default_meal=MealType(resolved_settings.default_detected_meal),
    )

    async def close_resources() -> None:
        await gemini_client.close()
        await imgbb_client.close()
        await groq_client.close()

    return AppContainer(
        settings=resolved_settings,
        store=store,
        tracker=tracker,
        catalog=FoodCatalog(),
        advisory_service=advisory_service,
        chat_session=ChatSession(advisor=advisory_service, tracker=tracker),
        image_pipeline=image_pipeline,
        close_resources=close_resources,
    )
