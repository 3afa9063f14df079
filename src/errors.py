"""Error taxonomy shared by the menu analyzer and the dish image generator."""


class MenuLensError(Exception):
    """Base class for failures raised by the Gemini/Imagen integration."""


class ConfigurationError(MenuLensError):
    """Raised when the API credential is missing. Not retryable."""


class ParseError(MenuLensError):
    """Raised when the model output cannot be interpreted as the declared schema."""


class UpstreamError(MenuLensError):
    """Raised on transport failures or non-success responses from the remote service."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class EmptyResultError(MenuLensError):
    """Raised when the remote service succeeds but returns no usable payload."""
