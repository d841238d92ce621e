"""Library configuration.

All values can be overridden through environment variables prefixed with
``GLYPHSTAG_``, e.g. ``GLYPHSTAG_FALLBACK_FRAME_DELAY=0.2``.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Library settings."""

    # Rendering defaults
    FONT_ASPECT: float = 0.55  # Cell aspect assumed by the batch tools
    DEFAULT_GRADIENT: str = "detailed"
    SOBEL_THRESHOLD: float = 0.2
    TRANSPARENT_ALPHA_THRESHOLD: float = 0.001  # Alpha at/below renders as blank

    # Timing (seconds)
    FALLBACK_FRAME_DELAY: float = 0.120  # Used for zero or missing frame delays
    STATIC_FRAME_DELAY: float = 0.1  # Delay the decoder assigns to still images

    # Command line defaults
    PREVIEW_WIDTH: int = 100
    CONVERT_WIDTH: int = 120
    ANIMATE_FPS: float = 12.0

    # Terminal host
    CHAR_ASPECT: float = 0.45  # Width/height of a terminal character cell

    LOG_LEVEL: str = "WARNING"

    model_config = {"env_prefix": "GLYPHSTAG_"}


settings = Settings()
