"""Error types for the Sensei coach module."""


class SenseiError(Exception):
    """Base exception for Sensei errors."""

    pass


class MissingSenseiInputError(SenseiError):
    """Raised when a request lacks the fields its mode needs.

    This is a user-facing error; the message is shown as-is.
    """

    def __init__(self, field_name: str, message: str | None = None):
        self.field_name = field_name
        self.message = message or f"Missing required field: {field_name}"
        super().__init__(self.message)
