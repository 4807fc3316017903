"""Panel orientation resolution and synchronous recomputation.

A recomputation always runs in the same order: sun position (only when
location or instant changed), panel orientation per tracking mode, then
efficiency. Subscribers only ever see complete snapshots.
"""

import logging
from typing import Callable

from ._types import (
    GeoLocation,
    Instant,
    PanelOrientation,
    SimulatorConfig,
    SunPosition,
    TrackingMode,
    TrackingSnapshot,
)
from .angles import compute_sun_position, instant_day_of_year
from .efficiency import compute_efficiency

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = SimulatorConfig()

Listener = Callable[[TrackingSnapshot], None]


def compute_panel_orientation(
    mode: TrackingMode | str, manual: PanelOrientation, sun: SunPosition
) -> PanelOrientation:
    """Resolve the panel orientation for the given tracking mode.

    AUTO points the panel straight at the sun; MANUAL keeps the operator's pose.
    """
    match TrackingMode(mode):
        case TrackingMode.AUTO:
            return PanelOrientation(azimuth=sun.azimuth, elevation=sun.elevation)
        case TrackingMode.MANUAL:
            return manual
        case _:
            raise ValueError(f"Unknown tracking mode: {mode}")


class TrackingController:
    """Holds the four inputs and the latest consistent snapshot.

    While auto-tracking, the stored manual orientation follows the tracked
    pose, so switching back to manual leaves the panel where tracking put it.
    """

    def __init__(self, instant: Instant, config: SimulatorConfig = DEFAULT_CONFIG):
        self._listeners: list[Listener] = []
        self._location = config.location
        self._instant = instant
        self._mode = TrackingMode(config.mode)
        self._manual = config.panel
        self._sun = compute_sun_position(self._location, self._instant)
        self._snapshot = self._resolve()

    @property
    def snapshot(self) -> TrackingSnapshot:
        return self._snapshot

    @property
    def mode(self) -> TrackingMode:
        return self._mode

    @property
    def manual_orientation(self) -> PanelOrientation:
        return self._manual

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener for new snapshots. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def update(
        self,
        *,
        location: GeoLocation | None = None,
        instant: Instant | None = None,
        mode: TrackingMode | str | None = None,
        manual: PanelOrientation | None = None,
    ) -> TrackingSnapshot:
        """Apply any subset of inputs and recompute once."""
        sun_stale = False
        changed = False

        if location is not None and location != self._location:
            self._location = location
            sun_stale = changed = True
        if instant is not None and instant != self._instant:
            self._instant = instant
            sun_stale = changed = True
        if mode is not None:
            new_mode = TrackingMode(mode)
            if new_mode != self._mode:
                logger.info("Tracking mode %s -> %s", self._mode, new_mode)
                self._mode = new_mode
                changed = True
        if manual is not None and manual != self._manual:
            if self._mode is TrackingMode.AUTO:
                # Tracking owns the pose; nothing for listeners to see
                logger.warning(
                    "Manual orientation %s superseded while auto-tracking", manual
                )
            else:
                self._manual = manual
                changed = True

        if not changed:
            return self._snapshot

        if sun_stale:
            self._sun = compute_sun_position(self._location, self._instant)
        self._snapshot = self._resolve()
        for listener in list(self._listeners):
            listener(self._snapshot)
        return self._snapshot

    def set_location(self, location: GeoLocation) -> TrackingSnapshot:
        return self.update(location=location)

    def set_instant(self, instant: Instant) -> TrackingSnapshot:
        return self.update(instant=instant)

    def set_mode(self, mode: TrackingMode | str) -> TrackingSnapshot:
        return self.update(mode=mode)

    def set_manual_orientation(self, manual: PanelOrientation) -> TrackingSnapshot:
        return self.update(manual=manual)

    def _resolve(self) -> TrackingSnapshot:
        panel = compute_panel_orientation(self._mode, self._manual, self._sun)
        if self._mode is TrackingMode.AUTO:
            self._manual = panel
        efficiency = compute_efficiency(panel, self._sun)
        logger.debug(
            "Recomputed sun=(%.2f, %.2f) panel=(%.2f, %.2f) efficiency=%.1f%%",
            self._sun.azimuth,
            self._sun.elevation,
            panel.azimuth,
            panel.elevation,
            efficiency,
        )
        return TrackingSnapshot(
            location=self._location,
            instant=self._instant,
            mode=self._mode,
            sun=self._sun,
            panel=panel,
            efficiency=efficiency,
        )


def summarize(snapshot: TrackingSnapshot) -> dict:
    """Flatten a snapshot into plain numbers and strings for display."""
    return {
        "latitude": snapshot.location.latitude,
        "longitude": snapshot.location.longitude,
        "timestamp": snapshot.instant.moment.isoformat(),
        "day_of_year": instant_day_of_year(snapshot.instant),
        "mode": str(snapshot.mode),
        "sun_azimuth": snapshot.sun.azimuth,
        "sun_elevation": snapshot.sun.elevation,
        "panel_azimuth": snapshot.panel.azimuth,
        "panel_elevation": snapshot.panel.elevation,
        "efficiency": snapshot.efficiency,
    }
