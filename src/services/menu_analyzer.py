"""Gemini vision service for menu translation and price estimation."""

import base64
import json
import logging
import re
import time

from pydantic import ValidationError

from src.datamodels import MenuAnalysisResult
from src.errors import MenuLensError
from src.errors import ParseError
from src.schema import MENU_ANALYSIS_SCHEMA
from src.services.gemini_client import GenerativeClient
from src.services.gemini_client import StructuredContent
from src.services.gemini_client import create_client
from src.values import GEMINI_API_KEY

logger = logging.getLogger(__name__)

DATA_URI_PREFIX = re.compile(r"^data:(image/\w+);base64,")
DEFAULT_MIME_TYPE = "image/jpeg"

USER_PROMPT = "Analyze this menu image. Extract dishes. Output in JSON format."

SYSTEM_INSTRUCTION = """You are a fast travel food guide. Analyze the menu image. Output strictly in Japanese.
1. Identify dishes, translate names to Japanese, and provide very brief Japanese descriptions.
2. Ensure the cuisine type is a standard Japanese term.
3. Extract the price for each dish.
4. Convert the price to Japanese Yen (JPY) using an approximate current exchange rate."""

# Food photos must not be refused, so only the most severe tier is blocked.
RELAXED_SAFETY_SETTINGS = {
    "HARM_CATEGORY_HARASSMENT": "BLOCK_ONLY_HIGH",
    "HARM_CATEGORY_HATE_SPEECH": "BLOCK_ONLY_HIGH",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT": "BLOCK_ONLY_HIGH",
    "HARM_CATEGORY_DANGEROUS_CONTENT": "BLOCK_ONLY_HIGH",
}


def strip_data_uri_prefix(image_data: str) -> str:
    """Remove a leading ``data:image/<type>;base64,`` prefix, if any."""
    return DATA_URI_PREFIX.sub("", image_data, count=1)


def mime_type_from_data_uri(image_data: str) -> str | None:
    """Return the MIME type named by a data URI prefix, or None for a bare payload."""
    match = DATA_URI_PREFIX.match(image_data)
    return match.group(1) if match else None


def extract_json_object(text: str) -> str:
    """Return the text between the first ``{`` and the last ``}``, inclusive.

    This is a heuristic for model output wrapped in prose or code fences, not
    a JSON parser: nothing between the braces is checked.

    Raises:
        ParseError: If there is no opening brace, or no closing brace after it.
    """
    first_brace = text.find("{")
    last_brace = text.rfind("}")
    if first_brace == -1 or last_brace < first_brace:
        raise ParseError("Invalid JSON response: no JSON object found")
    return text[first_brace : last_brace + 1]


def parse_menu_analysis(text: str) -> MenuAnalysisResult:
    """Coerce raw model text into a MenuAnalysisResult.

    Raises:
        ParseError: If no JSON object is found, the JSON is malformed, or a
            required field is missing or has the wrong type.
    """
    candidate = extract_json_object(text)
    try:
        data = json.loads(candidate)
    except json.JSONDecodeError as e:
        raise ParseError(f"Malformed JSON in model response: {e}") from e

    try:
        return MenuAnalysisResult.model_validate(data)
    except ValidationError as e:
        schema = f"{MENU_ANALYSIS_SCHEMA.name} v{MENU_ANALYSIS_SCHEMA.version}"
        raise ParseError(f"Model response does not match {schema}: {e}") from e


def _log_usage(model: str, content: StructuredContent, elapsed_time: float) -> None:
    logger.info(
        f"Token usage - Model: {model}, Input: {content.prompt_tokens}, Output: {content.output_tokens}, "
        f"Total: {content.total_tokens}, Finish: {content.finish_reason}, Time: {elapsed_time:.2f}s"
    )


def analyze_menu_image(
    image_data: str,
    mime_type: str | None = None,
    client: GenerativeClient | None = None,
) -> MenuAnalysisResult:
    """Translate a menu photo and estimate dish prices in yen.

    Args:
        image_data: Base64 image payload, optionally as a data URI.
        mime_type: MIME type declared for the image. Defaults to the type in
            a data URI prefix, or image/jpeg for a bare payload.
        client: Remote service client. Defaults to a GeminiClient built from
            the configured credential.

    Returns:
        MenuAnalysisResult with the cuisine type and dishes in menu order.

    Raises:
        ConfigurationError: If no client is given and no credential is configured.
        ParseError: If the model output cannot be read as the declared schema.
        UpstreamError: On transport or service failure.
        ValueError: If ``image_data`` is not valid base64.
    """
    if client is None:
        client = create_client(GEMINI_API_KEY)

    if mime_type is None:
        mime_type = mime_type_from_data_uri(image_data) or DEFAULT_MIME_TYPE
    image_bytes = base64.b64decode(strip_data_uri_prefix(image_data), validate=True)

    try:
        start_time = time.time()
        content = client.generate_structured_content(
            image_bytes=image_bytes,
            mime_type=mime_type,
            prompt=USER_PROMPT,
            schema=MENU_ANALYSIS_SCHEMA,
            system_instruction=SYSTEM_INSTRUCTION,
            safety_settings=RELAXED_SAFETY_SETTINGS,
        )
        _log_usage(client.model, content, time.time() - start_time)

        if not content.text:
            raise ParseError(f"No response from model (finish_reason: {content.finish_reason})")

        result = parse_menu_analysis(content.text)
    except MenuLensError as e:
        logger.error(f"Error analyzing menu: {e}")
        raise

    logger.info(f"Number of dishes: {len(result.dishes)}, Cuisine: {result.cuisine_type}")
    return result
