"""Gemini and Imagen client used by the menu analyzer and dish image generator."""

import logging
from abc import ABC
from abc import abstractmethod
from dataclasses import dataclass

import httpx
import requests
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from src.config import DEFAULT_GEMINI_MODEL
from src.config import DEFAULT_IMAGEN_MODEL
from src.errors import ConfigurationError
from src.errors import UpstreamError
from src.schema import ResponseSchema
from src.values import GEMINI_API_KEY

logger = logging.getLogger(__name__)

IMAGEN_API_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"


@dataclass
class StructuredContent:
    """Raw text returned by a schema-constrained generation call."""

    text: str | None
    finish_reason: str | None = None
    prompt_tokens: int | None = None
    output_tokens: int | None = None
    total_tokens: int | None = None


class GenerativeClient(ABC):
    """Capability the services need from the remote generative service.

    Tests substitute a fake implementation so no network calls are made.
    """

    model: str = ""

    @abstractmethod
    def generate_structured_content(
        self,
        image_bytes: bytes,
        mime_type: str,
        prompt: str,
        schema: ResponseSchema,
        system_instruction: str,
        safety_settings: dict[str, str],
    ) -> StructuredContent:
        """Generate JSON text for an image, constrained by ``schema``.

        Raises:
            UpstreamError: On transport or service failure.
        """
        ...

    @abstractmethod
    def generate_images(self, prompt: str, number_of_images: int, aspect_ratio: str) -> dict:
        """Request generated images and return the decoded success body.

        Raises:
            UpstreamError: On transport failure or a non-success status.
        """
        ...


def _error_message_from_response(response: requests.Response) -> str:
    """Read ``error.message`` from a failed response, or fall back to the status."""
    try:
        message = response.json()["error"]["message"]
    except (ValueError, KeyError, TypeError):
        message = None
    return message or f"HTTP Error: {response.status_code}"


class GeminiClient(GenerativeClient):
    """Talks to Gemini through the google-genai SDK and to Imagen over REST."""

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_GEMINI_MODEL,
        image_model: str = DEFAULT_IMAGEN_MODEL,
    ) -> None:
        self._api_key = api_key
        self.model = model
        self.image_model = image_model
        self._client = genai.Client(api_key=api_key)

    def generate_structured_content(
        self,
        image_bytes: bytes,
        mime_type: str,
        prompt: str,
        schema: ResponseSchema,
        system_instruction: str,
        safety_settings: dict[str, str],
    ) -> StructuredContent:
        config = types.GenerateContentConfig(
            system_instruction=system_instruction,
            response_mime_type="application/json",
            response_schema=schema.json_schema,
            safety_settings=[
                types.SafetySetting(category=category, threshold=threshold)
                for category, threshold in safety_settings.items()
            ],
        )

        try:
            response = self._client.models.generate_content(
                model=self.model,
                contents=[types.Part.from_bytes(data=image_bytes, mime_type=mime_type), prompt],
                config=config,
            )
        except genai_errors.APIError as e:
            raise UpstreamError(f"Gemini request failed: {e.message or e}", status_code=e.code) from e
        except httpx.HTTPError as e:
            raise UpstreamError(f"Gemini request failed: {e}") from e

        finish_reason = None
        if response.candidates:
            reason = response.candidates[0].finish_reason
            finish_reason = getattr(reason, "name", reason)

        usage = response.usage_metadata
        return StructuredContent(
            text=response.text,
            finish_reason=finish_reason,
            prompt_tokens=usage.prompt_token_count if usage else None,
            output_tokens=usage.candidates_token_count if usage else None,
            total_tokens=usage.total_token_count if usage else None,
        )

    def generate_images(self, prompt: str, number_of_images: int, aspect_ratio: str) -> dict:
        url = f"{IMAGEN_API_BASE_URL}/{self.image_model}:generateImages"
        body = {
            "prompt": prompt,
            "numberOfImages": number_of_images,
            "aspectRatio": aspect_ratio,
        }

        try:
            response = requests.post(url, params={"key": self._api_key}, json=body)
        except requests.RequestException as e:
            raise UpstreamError(f"Imagen request failed: {e}") from e

        if not response.ok:
            raise UpstreamError(_error_message_from_response(response), status_code=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(f"Invalid JSON response from Imagen: {e}", status_code=response.status_code) from e


def create_client(api_key: str = GEMINI_API_KEY) -> GeminiClient:
    """Build the default client, refusing to run without a credential.

    Raises:
        ConfigurationError: If ``api_key`` is empty.
    """
    if not api_key:
        raise ConfigurationError("GEMINI_API_KEY is not set")
    return GeminiClient(api_key=api_key)
