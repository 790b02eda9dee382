"""Exceptions raised by the pollen feed core and mapped to HTTP errors by the API."""


class PollenFeedError(Exception):
    """Base class for pollen feed failures."""


class InvalidDateError(PollenFeedError, ValueError):
    """The requested date is not a YYYY-MM-DD calendar date."""


class InvalidIntervalError(PollenFeedError, ValueError):
    """The requested interval is not one the sensor API accepts."""


class SensorApiError(PollenFeedError):
    """The sensor API could not be reached or returned an unusable body."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
