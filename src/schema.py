"""Output schemas declared to the remote model alongside generation requests.

The schemas are plain JSON-schema style dicts so they do not depend on any
particular client library's schema type. Bump ``version`` whenever the shape
changes, since callers deserialize into ``src.datamodels`` against it.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ResponseSchema:
    """A named, versioned output contract for a generation request."""

    name: str
    version: str
    json_schema: dict[str, Any]


DISH_FIELDS = ["originalName", "translatedName", "description", "price", "estimatedYen"]

MENU_ANALYSIS_SCHEMA = ResponseSchema(
    name="menu_analysis",
    version="1",
    json_schema={
        "type": "object",
        "properties": {
            "cuisineType": {
                "type": "string",
                "description": (
                    "The general cuisine type of the menu in Japanese "
                    "(e.g., イタリア料理, タイ料理, 居酒屋). Do not use English."
                ),
            },
            "dishes": {
                "type": "array",
                "description": "List of identified dishes from the menu.",
                "items": {
                    "type": "object",
                    "properties": {
                        "originalName": {
                            "type": "string",
                            "description": "The name of the dish as it appears on the menu (keep original language).",
                        },
                        "translatedName": {
                            "type": "string",
                            "description": "Natural Japanese translation of the dish name.",
                        },
                        "description": {
                            "type": "string",
                            "description": "A brief, simple Japanese description of the dish (max 30 chars).",
                        },
                        "price": {
                            "type": "string",
                            "description": (
                                "The price string as found on the menu including symbol "
                                "(e.g., '$15.00', '€12', '250 THB'). Return empty string if not found."
                            ),
                        },
                        "estimatedYen": {
                            "type": "integer",
                            "description": (
                                "Estimated price in Japanese Yen (JPY) calculated based on the currency "
                                "and an approximate current exchange rate. Return 0 if price is not found."
                            ),
                        },
                    },
                    "required": DISH_FIELDS,
                },
            },
        },
        "required": ["cuisineType", "dishes"],
    },
)
