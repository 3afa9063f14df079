"""Property-based tests for data URI stripping and JSON extraction."""

import base64
import json

import pytest
from hypothesis import given
from hypothesis import settings
from hypothesis import strategies as st

from src.errors import ParseError
from src.services.menu_analyzer import extract_json_object
from src.services.menu_analyzer import parse_menu_analysis
from src.services.menu_analyzer import strip_data_uri_prefix

base64_payload = st.binary(max_size=256).map(lambda data: base64.b64encode(data).decode("utf-8"))

# Prose surrounding the object must not contain braces of its own.
prose = st.text(alphabet=st.characters(exclude_characters="{}", exclude_categories=("Cs",)), max_size=80)

dish_strategy = st.fixed_dictionaries(
    {
        "originalName": st.text(max_size=30),
        "translatedName": st.text(max_size=30),
        "description": st.text(max_size=30),
        "price": st.text(max_size=10),
        "estimatedYen": st.integers(min_value=0, max_value=10_000_000),
    }
)

menu_strategy = st.fixed_dictionaries(
    {
        "cuisineType": st.text(max_size=20),
        "dishes": st.lists(dish_strategy, max_size=5),
    }
)


@given(payload=base64_payload)
def test_strip_is_noop_without_prefix(payload: str):
    assert strip_data_uri_prefix(payload) == payload


@given(payload=base64_payload, image_type=st.sampled_from(["jpeg", "png", "webp", "gif"]))
def test_strip_is_idempotent(payload: str, image_type: str):
    once = strip_data_uri_prefix(f"data:image/{image_type};base64,{payload}")

    assert once == payload
    assert strip_data_uri_prefix(once) == once


@settings(max_examples=100)
@given(menu=menu_strategy, before=prose, after=prose, ensure_ascii=st.booleans())
def test_embedded_object_is_extracted_unchanged(menu: dict, before: str, after: str, ensure_ascii: bool):
    document = json.dumps(menu, ensure_ascii=ensure_ascii)
    text = f"{before}{document}{after}"

    assert extract_json_object(text) == document
    assert json.loads(extract_json_object(text)) == menu


@settings(max_examples=100)
@given(menu=menu_strategy, before=prose, after=prose)
def test_embedded_menu_parses_to_same_dishes(menu: dict, before: str, after: str):
    result = parse_menu_analysis(f"{before}{json.dumps(menu)}{after}")

    assert result.model_dump(by_alias=True) == menu


@given(text=st.text(alphabet=st.characters(exclude_characters="{", exclude_categories=("Cs",))))
def test_text_without_opening_brace_fails(text: str):
    with pytest.raises(ParseError, match="no JSON object found"):
        extract_json_object(text)


@given(text=st.text(alphabet=st.characters(exclude_characters="}", exclude_categories=("Cs",))))
def test_text_without_closing_brace_fails(text: str):
    with pytest.raises(ParseError, match="no JSON object found"):
        extract_json_object(text)
