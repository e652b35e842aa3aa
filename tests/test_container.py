"""Tests for container wiring."""

import asyncio
import logging

from calorie_tracker.config import Settings
from calorie_tracker.containers import build_container
from calorie_tracker.domain.foods import MealType


def test_build_container_creates_services(settings: Settings) -> None:
    container = build_container(settings)

    assert container.tracker.goal.value == 2000
    assert container.image_pipeline.default_meal is MealType.LUNCH
    assert container.chat_session.messages
    asyncio.run(container.close_resources())


def test_container_state_survives_restart(settings: Settings) -> None:
    first = build_container(settings)
    first.tracker.log_food(name="Egg", calories=70, quantity=2)
    first.tracker.update_goal(1800)
    asyncio.run(first.close_resources())

    second = build_container(settings)

    assert second.tracker.goal.value == 1800
    assert [entry.name for entry in second.tracker.history()] == ["Egg"]
    asyncio.run(second.close_resources())


def test_build_container_uses_configured_log_level(settings: Settings) -> None:
    logger = logging.getLogger("calorie_tracker")
    container = build_container(settings.model_copy(update={"log_level": "warning"}))

    assert logger.level == logging.WARNING
    asyncio.run(container.close_resources())
    logger.setLevel(logging.INFO)
