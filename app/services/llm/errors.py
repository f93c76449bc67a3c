"""Errors raised around calls to the completion service."""


class CompletionError(Exception):
    """Raised when the completion service call fails or returns unusable output."""

    def __init__(self, feature: str, message: str | None = None):
        self.feature = feature
        self.message = message or f"{feature} completion failed"
        super().__init__(self.message)


class EmptyCompletionError(CompletionError):
    """Raised when the completion service returns no content."""

    def __init__(self, feature: str):
        super().__init__(feature, f"{feature} returned empty output")
