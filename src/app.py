"""Flask JSON API for menu analysis and dish image generation."""

import logging

from flask import Flask
from flask import jsonify
from flask import request

from src.config import FLASK_PORT
from src.config import MAX_UPLOAD_SIZE_MB
from src.datamodels import GeneratedDishImage
from src.errors import ConfigurationError
from src.errors import EmptyResultError
from src.errors import ParseError
from src.errors import UpstreamError
from src.image_validation import ImageValidationError
from src.image_validation import encode_uploaded_image
from src.services.dish_image_service import generate_dish_image
from src.services.menu_analyzer import analyze_menu_image

logger = logging.getLogger(__name__)
logging.basicConfig(
    level=logging.INFO,
    format="[%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

app = Flask(__name__)
app.config["MAX_CONTENT_LENGTH"] = MAX_UPLOAD_SIZE_MB * 1024 * 1024


def _error(message: str, status: int):
    return jsonify({"status": "error", "message": message}), status


@app.errorhandler(ConfigurationError)
def handle_configuration_error(e):
    logger.error(f"Configuration error: {e}")
    return _error("Service is not configured: missing API key", 503)


@app.errorhandler(ParseError)
def handle_parse_error(e):
    return _error(f"Could not read the model response: {e}", 502)


@app.errorhandler(UpstreamError)
def handle_upstream_error(e):
    return _error(f"Upstream service error: {e}", 502)


@app.errorhandler(EmptyResultError)
def handle_empty_result_error(e):
    return _error(f"No result generated: {e}", 502)


@app.route("/status")
def status():
    """Health check endpoint."""
    return jsonify({"status": "ok"})


@app.route("/api/analyze", methods=["POST"])
def analyze_menu():
    """Analyze a menu photo.

    Accepts either a multipart ``image`` file or a JSON body ``{"image": ...}``
    holding base64 data or a data URI.
    """
    if "image" in request.files:
        file = request.files["image"]
        try:
            image_data, mime_type = encode_uploaded_image(file.read(), file.filename)
        except ImageValidationError as e:
            return _error(str(e), 400)
    else:
        payload = request.get_json(silent=True) or {}
        image_data = payload.get("image")
        mime_type = payload.get("mimeType")
        if not image_data or not isinstance(image_data, str):
            return _error("No image provided", 400)

    try:
        result = analyze_menu_image(image_data, mime_type=mime_type)
    except ValueError as e:
        return _error(f"Invalid image data: {e}", 400)

    return jsonify({"status": "success", "data": result.model_dump(by_alias=True)})


@app.route("/api/dish-image", methods=["POST"])
def dish_image():
    """Generate an illustrative photo for a dish description."""
    payload = request.get_json(silent=True) or {}
    description = payload.get("description")
    if not description or not isinstance(description, str):
        return _error("No dish description provided", 400)

    image = GeneratedDishImage(description=description, image_data_uri=generate_dish_image(description))
    return jsonify({"status": "success", "data": image.model_dump(by_alias=True)})


def main():
    """Run the Flask application."""
    app.run(host="0.0.0.0", port=FLASK_PORT, debug=False)


if __name__ == "__main__":
    main()
