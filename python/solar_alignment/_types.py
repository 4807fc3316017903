"""Frozen dataclasses for all structured inputs and return types."""

import math
from dataclasses import dataclass
from datetime import datetime as DateTime
from enum import StrEnum


class TrackingMode(StrEnum):
    MANUAL = "manual"
    AUTO = "auto"


def _require_finite(**values: float) -> None:
    for name, value in values.items():
        if not math.isfinite(value):
            raise ValueError(f"{name} must be finite, got {value!r}")


@dataclass(frozen=True)
class GeoLocation:
    latitude: float
    longitude: float

    def __post_init__(self):
        _require_finite(latitude=self.latitude, longitude=self.longitude)


@dataclass(frozen=True)
class Instant:
    """Local wall-clock timestamp.

    Timezone-aware datetimes are read on their own wall clock, never converted.
    """

    moment: DateTime


@dataclass(frozen=True)
class SunPosition:
    azimuth: float
    elevation: float


@dataclass(frozen=True)
class PanelOrientation:
    azimuth: float
    elevation: float

    def __post_init__(self):
        _require_finite(azimuth=self.azimuth, elevation=self.elevation)


@dataclass(frozen=True)
class TrackingSnapshot:
    location: GeoLocation
    instant: Instant
    mode: TrackingMode
    sun: SunPosition
    panel: PanelOrientation
    efficiency: float


@dataclass(frozen=True)
class SimulatorConfig:
    latitude: float = 45.0
    longitude: float = 0.0
    panel_azimuth: float = 0.0
    panel_elevation: float = 45.0
    mode: TrackingMode = TrackingMode.MANUAL

    @property
    def location(self) -> GeoLocation:
        return GeoLocation(latitude=self.latitude, longitude=self.longitude)

    @property
    def panel(self) -> PanelOrientation:
        return PanelOrientation(
            azimuth=self.panel_azimuth, elevation=self.panel_elevation
        )
