from .base import WeatherFetcher, WeatherFetchFailed
from .openweathermap import OpenWeatherMapFetcher

__all__ = ["WeatherFetcher", "WeatherFetchFailed", "OpenWeatherMapFetcher"]
