"""Error types for Sensei Vision."""


class VisionError(Exception):
    """Base exception for Sensei Vision errors."""

    pass


class MissingVisionInputError(VisionError):
    """Raised when a request has no text, image or message."""

    def __init__(self, message: str = "Missing input for Sensei Vision."):
        self.message = message
        super().__init__(message)


class InvalidImageError(VisionError):
    """Raised when the image payload cannot be decoded."""

    def __init__(self, message: str = "Invalid image payload."):
        self.message = message
        super().__init__(message)
