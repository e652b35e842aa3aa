"""Models for image recognition results."""

from dataclasses import dataclass

from pydantic import AliasChoices, BaseModel, Field


@dataclass(frozen=True)
class ImageUpload:
    """Image selected for analysis."""

    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        """Size of the image in bytes."""
        return len(self.data)


class DetectedItem(BaseModel):
    """Single food item estimated from a photo."""

    name: str = Field(validation_alias=AliasChoices("item_name", "name"))
    total_calories: float = Field(ge=0.0, allow_inf_nan=False)
    protein: float = Field(
        default=0.0,
        ge=0.0,
        allow_inf_nan=False,
        validation_alias=AliasChoices("total_protein", "total_protien", "protein"),
    )
    carbs: float = Field(
        default=0.0,
        ge=0.0,
        allow_inf_nan=False,
        validation_alias=AliasChoices("total_carbs", "toal_carbs", "carbs"),
    )
    fats: float = Field(
        default=0.0,
        ge=0.0,
        allow_inf_nan=False,
        validation_alias=AliasChoices("total_fats", "toal_fats", "fats"),
    )


class DetectionResult(BaseModel):
    """Structured output of the vision model."""

    items: list[DetectedItem] = Field(default_factory=list)
