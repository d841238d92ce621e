"""Exception classes for glyph rendering and playback."""


class GlyphStagError(Exception):
    """Base exception for GlyphStag errors."""

    pass


class InvalidLayoutError(GlyphStagError, ValueError):
    """Raised when no valid target geometry can be derived.

    Happens for zero-size sources, non-positive column/row requests and
    non-positive cell aspect ratios.
    """

    pass


class DecodeError(GlyphStagError):
    """Raised when a source file or byte stream can not be decoded."""

    pass


class DimensionMismatchError(GlyphStagError):
    """Raised when a grid does not match the geometry of its frame series."""

    pass


class FrameCountMismatchError(GlyphStagError):
    """Raised when the rendered cell count disagrees with geometry x frames."""

    pass
