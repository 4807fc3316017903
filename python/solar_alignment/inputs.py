"""Parse host form values into validated core inputs.

Dates arrive as `YYYY-MM-DD`, times as `HH:MM`, coordinates as decimal
degrees. Anything malformed is rejected here so the core only ever sees
finite numbers.
"""

import logging
import math
import re
from datetime import date as Date, datetime as DateTime, time as Time

from ._types import GeoLocation, Instant, PanelOrientation

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"
# strptime alone also accepts unpadded fields such as 2026-6-1 or 7:5
DATE_SHAPE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
TIME_SHAPE = re.compile(r"[0-9]{2}:[0-9]{2}")
LATITUDE_RANGE = (-90.0, 90.0)
LONGITUDE_RANGE = (-180.0, 180.0)
PANEL_AZIMUTH_RANGE = (0.0, 360.0)
PANEL_ELEVATION_RANGE = (0.0, 90.0)


class InvalidInputError(ValueError):
    """A host input field could not be turned into a core value."""

    def __init__(self, field: str, value, reason: str):
        self.field = field
        self.value = value
        super().__init__(f"Invalid {field} {value!r}: {reason}")


def _reject(field: str, value, reason: str) -> InvalidInputError:
    logger.debug("Rejected %s=%r (%s)", field, value, reason)
    return InvalidInputError(field, value, reason)


def _parse_clock_field(
    field: str, text: str, shape: re.Pattern, fmt: str, label: str
) -> DateTime:
    try:
        stripped = text.strip()
    except AttributeError as exc:
        raise _reject(field, text, "not a string") from exc
    if not shape.fullmatch(stripped):
        raise _reject(field, text, f"expected {label}")
    try:
        return DateTime.strptime(stripped, fmt)
    except ValueError as exc:
        raise _reject(field, text, "no such " + field) from exc


def parse_date(text: str) -> Date:
    """Parse a zero-padded `YYYY-MM-DD` calendar date."""
    return _parse_clock_field("date", text, DATE_SHAPE, DATE_FORMAT, "YYYY-MM-DD").date()


def parse_time(text: str) -> Time:
    """Parse a zero-padded `HH:MM` local clock time."""
    return _parse_clock_field("time", text, TIME_SHAPE, TIME_FORMAT, "HH:MM").time()


def parse_instant(date_text: str, time_text: str) -> Instant:
    """Combine date and time strings into a local Instant."""
    return Instant(
        moment=DateTime.combine(parse_date(date_text), parse_time(time_text))
    )


def parse_degrees(
    field: str, text, bounds: tuple[float, float] | None = None
) -> float:
    """Parse a decimal-degree value, optionally enforcing inclusive bounds."""
    try:
        value = float(text)
    except (TypeError, ValueError) as exc:
        raise _reject(field, text, "not a number") from exc
    if not math.isfinite(value):
        raise _reject(field, text, "must be finite")
    if bounds is not None and not bounds[0] <= value <= bounds[1]:
        raise _reject(field, text, f"outside [{bounds[0]:g}, {bounds[1]:g}]")
    return value


def parse_location(latitude_text, longitude_text, strict: bool = False) -> GeoLocation:
    """Parse latitude/longitude into a GeoLocation.

    Out-of-range values are only rejected when strict is set; the solar
    formulas still give a defined result for them.
    """
    return GeoLocation(
        latitude=parse_degrees(
            "latitude", latitude_text, LATITUDE_RANGE if strict else None
        ),
        longitude=parse_degrees(
            "longitude", longitude_text, LONGITUDE_RANGE if strict else None
        ),
    )


def parse_panel_orientation(azimuth_text, elevation_text) -> PanelOrientation:
    """Parse an operator-set panel pose, azimuth in [0, 360], elevation in [0, 90]."""
    return PanelOrientation(
        azimuth=parse_degrees("panel azimuth", azimuth_text, PANEL_AZIMUTH_RANGE),
        elevation=parse_degrees(
            "panel elevation", elevation_text, PANEL_ELEVATION_RANGE
        ),
    )
