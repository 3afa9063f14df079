"""Data models for menu analysis and dish image generation."""

from enum import Enum

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field


class AppState(str, Enum):
    """Lifecycle of a client screen driving the analyzer."""

    IDLE = "IDLE"
    PROCESSING_MENU = "PROCESSING_MENU"
    RESULTS = "RESULTS"
    ERROR = "ERROR"


class Dish(BaseModel):
    """A single menu item after translation and price estimation.

    Every field is required on the wire. ``price`` is an empty string and
    ``estimated_yen`` is 0 when the menu shows no price.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    original_name: str = Field(alias="originalName")
    translated_name: str = Field(alias="translatedName")
    description: str
    price: str
    estimated_yen: int = Field(alias="estimatedYen")


class MenuAnalysisResult(BaseModel):
    """Cuisine classification plus the ordered dishes read from one menu photo."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    cuisine_type: str = Field(alias="cuisineType")
    dishes: list[Dish]


class GeneratedDishImage(BaseModel):
    """An illustrative photo returned for a dish description."""

    model_config = ConfigDict(populate_by_name=True)

    description: str
    image_data_uri: str = Field(alias="imageDataUri")
