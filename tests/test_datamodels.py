"""Tests for data models."""

import pytest
from pydantic import ValidationError

from src.datamodels import AppState
from src.datamodels import Dish
from src.datamodels import MenuAnalysisResult


def test_dish_accepts_wire_and_python_names():
    """Test dishes can be built from camelCase payloads or snake_case kwargs."""
    from_wire = Dish.model_validate(
        {
            "originalName": "Bún chả",
            "translatedName": "ブンチャー",
            "description": "焼き豚つけ麺",
            "price": "60.000đ",
            "estimatedYen": 360,
        }
    )
    from_kwargs = Dish(
        original_name="Bún chả",
        translated_name="ブンチャー",
        description="焼き豚つけ麺",
        price="60.000đ",
        estimated_yen=360,
    )

    assert from_wire == from_kwargs


def test_menu_analysis_result_is_immutable():
    """Test results cannot be modified once produced."""
    result = MenuAnalysisResult(cuisine_type="ベトナム料理", dishes=[])

    with pytest.raises(ValidationError):
        result.cuisine_type = "タイ料理"


def test_menu_analysis_result_dumps_camel_case():
    """Test serialization uses the declared schema's field names."""
    result = MenuAnalysisResult(cuisine_type="ベトナム料理", dishes=[])

    assert result.model_dump(by_alias=True) == {"cuisineType": "ベトナム料理", "dishes": []}


def test_app_state_values():
    """Test the app states serialize as their names."""
    assert [state.value for state in AppState] == ["IDLE", "PROCESSING_MENU", "RESULTS", "ERROR"]
    assert AppState("RESULTS") is AppState.RESULTS
