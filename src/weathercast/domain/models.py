from __future__ import annotations

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ResolvedLocation(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    display_name: str
    country_code: str = ""

    @field_validator("display_name")
    @classmethod
    def validate_display_name(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError("location display_name must not be empty")
        return text


class ForecastSample(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True, allow_inf_nan=False)

    timestamp_seconds: int
    temperature: float
    condition_category: str
    condition_main: str
    humidity: int


class DailyForecastSummary(BaseModel):
    model_config = ConfigDict(extra="ignore")

    calendar_day: date
    high_temp: int
    low_temp: int
    condition_category: str
    representative_description: str

    @model_validator(mode="after")
    def validate_temp_range(self) -> DailyForecastSummary:
        if self.high_temp < self.low_temp:
            raise ValueError("daily forecast high_temp must be >= low_temp")
        return self


class CurrentConditions(BaseModel):
    model_config = ConfigDict(extra="ignore")

    location_label: str
    temperature: int
    feels_like: int
    description: str
    condition_category: str
    humidity: int
    wind_speed: int
    pressure: int
    visibility: int
    observed_at: datetime
    latitude: float | None = None
    longitude: float | None = None


class WeatherReport(BaseModel):
    model_config = ConfigDict(extra="ignore")

    current: CurrentConditions
    forecast: list[DailyForecastSummary] = Field(default_factory=list)


class ViewStateKind(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"
    DISPLAYING = "displaying"


class ViewState(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    kind: ViewStateKind = ViewStateKind.IDLE
    message: str | None = None
    report: WeatherReport | None = None

    @model_validator(mode="after")
    def validate_payload(self) -> ViewState:
        if self.kind is ViewStateKind.ERROR:
            if not self.message:
                raise ValueError("error view state requires a message")
        elif self.message is not None:
            raise ValueError(f"{self.kind.value} view state does not carry a message")

        if self.kind is ViewStateKind.DISPLAYING:
            if self.report is None:
                raise ValueError("displaying view state requires a report")
        elif self.report is not None:
            raise ValueError(f"{self.kind.value} view state does not carry a report")
        return self

    @classmethod
    def idle(cls) -> ViewState:
        return cls(kind=ViewStateKind.IDLE)

    @classmethod
    def loading(cls) -> ViewState:
        return cls(kind=ViewStateKind.LOADING)

    @classmethod
    def error(cls, message: str) -> ViewState:
        return cls(kind=ViewStateKind.ERROR, message=message)

    @classmethod
    def displaying(
        cls,
        current: CurrentConditions,
        forecast: list[DailyForecastSummary],
    ) -> ViewState:
        return cls(
            kind=ViewStateKind.DISPLAYING,
            report=WeatherReport(current=current, forecast=forecast),
        )
