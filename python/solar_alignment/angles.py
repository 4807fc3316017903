"""Apparent sun position from location and local clock time.

All angles in degrees unless otherwise noted. Uses the simplified
declination formula and treats longitude as a stand-in for the time-zone
offset (15 degrees per hour); no equation-of-time or refraction correction.
"""

import math

from ._types import GeoLocation, Instant, SunPosition

EARTH_AXIAL_TILT = 23.45
DEGREES_PER_HOUR = 15.0
DAYS_PER_YEAR = 365.0
# Day 81 is the spring equinox in the simplified declination model
EQUINOX_DAY = 81


def deg_to_rad(deg: float) -> float:
    """Convert degrees to radians."""
    return deg * (math.pi / 180.0)


def rad_to_deg(rad: float) -> float:
    """Convert radians to degrees."""
    return rad * (180.0 / math.pi)


def clamp(value: float, lower: float, upper: float) -> float:
    """Limit value to the closed range [lower, upper]."""
    return max(lower, min(upper, value))


def clamp_unit(value: float) -> float:
    """Clamp an inverse-trig argument to [-1, 1].

    NaN maps to 1.0 so it never reaches asin/acos.
    """
    if math.isnan(value):
        return 1.0
    return clamp(value, -1.0, 1.0)


def normalize_angle(angle: float) -> float:
    """Normalize angle to 0-360 degree range."""
    return angle % 360.0


def leap_year(year: int) -> bool:
    """Returns True if year is a leap year."""
    return (year % 400 == 0) or (year % 4 == 0 and year % 100 != 0)


def days_in_months(year: int) -> list[int]:
    """Returns a list of days per month for the given year."""
    return [31, 29 if leap_year(year) else 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31]


def day_of_year(year: int, month: int, day: int) -> int:
    """Calculate day of year (1-366) from year, month, day."""
    return sum(days_in_months(year)[: month - 1]) + day


def clock_hours(hour: int, minute: int = 0, second: int = 0) -> float:
    """Local clock time as fractional hours since midnight."""
    return hour + minute / 60.0 + second / 3600.0


def instant_day_of_year(instant: Instant) -> int:
    """Day of year (1-366) of a local instant."""
    m = instant.moment
    return day_of_year(m.year, m.month, m.day)


def instant_hour(instant: Instant) -> float:
    """Local clock hours [0, 24) of an instant, seconds included."""
    m = instant.moment
    return clock_hours(m.hour, m.minute, m.second)


def solar_declination(n: int) -> float:
    """Calculate solar declination angle.

    Input: n = day of year (1-366)
    Output: declination in degrees, peaking at +/-23.45 near the solstices.
    """
    return EARTH_AXIAL_TILT * math.sin(
        deg_to_rad((360.0 / DAYS_PER_YEAR) * (n - EQUINOX_DAY))
    )


def hour_angle(hour: float, longitude: float) -> float:
    """Hour angle from local clock hours, offset by longitude.

    Zero at 12:00 on the prime meridian; each hour adds 15 degrees.
    """
    return DEGREES_PER_HOUR * (hour - 12.0) + longitude


def solar_elevation(latitude: float, declination: float, hour_angle: float) -> float:
    """Unclamped solar elevation in degrees (negative below the horizon)."""
    lat_rad = deg_to_rad(latitude)
    dec_rad = deg_to_rad(declination)
    ha_rad = deg_to_rad(hour_angle)
    sin_elev = math.sin(lat_rad) * math.sin(dec_rad) + math.cos(
        lat_rad
    ) * math.cos(dec_rad) * math.cos(ha_rad)
    return rad_to_deg(math.asin(clamp_unit(sin_elev)))


def _saturating_ratio(numerator: float, denominator: float) -> float:
    if denominator == 0.0:
        return math.copysign(1.0, numerator) if numerator != 0.0 else 1.0
    return numerator / denominator


def solar_azimuth(
    latitude: float, declination: float, elevation: float, hour: float
) -> float:
    """Solar azimuth in degrees from the elevation-based arccos formula.

    arccos only spans 0-180, so afternoon hours (strictly after 12:00) are
    mirrored onto 180-360. Result is unclamped.
    """
    lat_rad = deg_to_rad(latitude)
    dec_rad = deg_to_rad(declination)
    elev_rad = deg_to_rad(elevation)
    cos_az = _saturating_ratio(
        math.sin(dec_rad) - math.sin(lat_rad) * math.sin(elev_rad),
        math.cos(lat_rad) * math.cos(elev_rad),
    )
    azimuth = rad_to_deg(math.acos(clamp_unit(cos_az)))
    if hour > 12.0:
        return 360.0 - azimuth
    return azimuth


def compute_sun_position(location: GeoLocation, instant: Instant) -> SunPosition:
    """Calculate the sun's azimuth and elevation for a location and local time.

    Never raises for finite input. Elevation is clamped to [0, 90] and
    azimuth to [0, 360), so a sun below the horizon reports elevation 0.
    """
    hour = instant_hour(instant)
    decl = solar_declination(instant_day_of_year(instant))
    ha = hour_angle(hour, location.longitude)
    elev = solar_elevation(location.latitude, decl, ha)
    azim = solar_azimuth(location.latitude, decl, elev, hour)
    return SunPosition(
        azimuth=normalize_angle(clamp(azim, 0.0, 360.0)),
        elevation=clamp(elev, 0.0, 90.0),
    )


def direction_vector(
    sun: SunPosition, distance: float = 1.0
) -> tuple[float, float, float]:
    """Scene coordinates (x, y, z) of the sun at the given distance.

    y is up; azimuth 0 points along +z and azimuth 90 along +x.
    """
    az_rad = deg_to_rad(sun.azimuth)
    el_rad = deg_to_rad(sun.elevation)
    return (
        distance * math.cos(el_rad) * math.sin(az_rad),
        distance * math.sin(el_rad),
        distance * math.cos(el_rad) * math.cos(az_rad),
    )
