"""Cosine-coupling efficiency between panel orientation and sun position.

Azimuth and elevation misalignment attenuate independently:

    efficiency = cos(d_azimuth) * cos(d_elevation) * 100

clamped to [0, 100]. This is not a projected-area model.
"""

import math

from ._types import PanelOrientation, SunPosition
from .angles import clamp, deg_to_rad

MAX_EFFICIENCY = 100.0


def angle_difference(a: float, b: float) -> float:
    """Absolute difference between two angles, not wrapped into 0-180."""
    return abs(a - b)


def cosine_factor(diff: float) -> float:
    """Attenuation factor for a misalignment of diff degrees."""
    return math.cos(deg_to_rad(diff))


def compute_efficiency(panel: PanelOrientation, sun: SunPosition) -> float:
    """Efficiency percentage (0-100) of a panel facing the given sun position."""
    azimuth_factor = cosine_factor(angle_difference(panel.azimuth, sun.azimuth))
    elevation_factor = cosine_factor(angle_difference(panel.elevation, sun.elevation))
    return clamp(azimuth_factor * elevation_factor * MAX_EFFICIENCY, 0.0, MAX_EFFICIENCY)
