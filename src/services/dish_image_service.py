"""Imagen service for illustrative dish photos."""

import logging

from src.errors import EmptyResultError
from src.errors import MenuLensError
from src.services.gemini_client import GenerativeClient
from src.services.gemini_client import create_client
from src.values import GEMINI_API_KEY

logger = logging.getLogger(__name__)

NUMBER_OF_IMAGES = 1
ASPECT_RATIO = "1:1"


def build_dish_image_prompt(description: str) -> str:
    """Wrap a dish description in a food photography prompt."""
    return (
        f"A delicious, professional food photography shot of: {description}. "
        "High resolution, appetizing lighting, centered composition, shallow depth of field."
    )


def _first_image_bytes(data: dict) -> str | None:
    """Return ``generatedImages[0].image.imageBytes`` or None if any level is missing."""
    images = data.get("generatedImages") if isinstance(data, dict) else None
    if not images:
        return None
    image = images[0].get("image") if isinstance(images[0], dict) else None
    if not isinstance(image, dict):
        return None
    return image.get("imageBytes") or None


def generate_dish_image(description: str, client: GenerativeClient | None = None) -> str:
    """Generate a square photo of a dish.

    Args:
        description: Short description of the dish to illustrate.
        client: Remote service client. Defaults to a GeminiClient built from
            the configured credential.

    Returns:
        The image as a ``data:image/jpeg;base64,...`` URI.

    Raises:
        ConfigurationError: If no client is given and no credential is configured.
        UpstreamError: If the request fails or the service reports an error status.
        EmptyResultError: If the service succeeds but returns no image bytes.
    """
    if client is None:
        client = create_client(GEMINI_API_KEY)

    prompt = build_dish_image_prompt(description)
    try:
        data = client.generate_images(prompt, number_of_images=NUMBER_OF_IMAGES, aspect_ratio=ASPECT_RATIO)
        image_bytes = _first_image_bytes(data)
        if not image_bytes:
            raise EmptyResultError("Failed to generate image: response contained no image bytes")
    except MenuLensError as e:
        logger.error(f"Error generating dish image: {e}")
        raise

    logger.info(f"Generated image for dish: {description!r}")
    return f"data:image/jpeg;base64,{image_bytes}"
