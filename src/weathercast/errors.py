from __future__ import annotations


class WeatherAppError(RuntimeError):
    """Base class for failures that end a search in the error state."""


class ConfigurationError(WeatherAppError):
    """Raised when the OpenWeatherMap credential is missing or a placeholder."""


class LocationNotFound(WeatherAppError):
    """Raised when geocoding returns no match or the lookup fails."""


class WeatherFetchFailed(WeatherAppError):
    """Raised when a current-conditions or forecast request cannot be completed."""


class MalformedResponse(WeatherAppError):
    """Raised when an upstream payload does not have the expected shape."""
