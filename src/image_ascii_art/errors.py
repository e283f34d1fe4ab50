"""Exceptions raised by the image to ASCII art pipeline."""


class AsciiArtError(Exception):
    """Base class for every failure the pipeline reports to the user."""


class ImageNotFoundError(AsciiArtError, FileNotFoundError):
    pass


class UnsupportedFormatError(AsciiArtError):
    pass


class InvalidConfigurationError(AsciiArtError):
    pass


class ProcessingError(AsciiArtError):
    """Decode or write failure; the original exception is chained."""
