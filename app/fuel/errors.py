"""Error types for the Fuel module."""


class FuelError(Exception):
    """Base exception for Fuel errors."""

    pass


class FuelReportNotFoundError(FuelError):
    """Raised when a refinement references a follow-up thread the user does not own."""

    def __init__(self, followups_id: str):
        self.followups_id = followups_id
        super().__init__(f"Could not find prior Fuel report for followups_id={followups_id}")


class MissingFuelInputError(FuelError):
    """Raised when a request is missing the meal text or image."""

    def __init__(self, field_name: str, message: str | None = None):
        self.field_name = field_name
        self.message = message or f"Missing {field_name}"
        super().__init__(self.message)
