"""Tracking mode resolution and recomputation tests."""

import logging
from datetime import datetime

import pytest

from solar_alignment._types import (
    GeoLocation,
    Instant,
    PanelOrientation,
    SimulatorConfig,
    SunPosition,
    TrackingMode,
)
from solar_alignment.angles import compute_sun_position
from solar_alignment.efficiency import compute_efficiency
from solar_alignment.tracking import (
    DEFAULT_CONFIG,
    TrackingController,
    compute_panel_orientation,
    summarize,
)

SOLSTICE_NOON = Instant(datetime(2026, 6, 21, 12, 0))
EQUINOX_MORNING = Instant(datetime(2026, 3, 22, 9, 0))


@pytest.fixture
def controller():
    return TrackingController(SOLSTICE_NOON)


class TestComputePanelOrientation:
    SUN = SunPosition(azimuth=213.4, elevation=37.9)
    MANUAL = PanelOrientation(azimuth=90.0, elevation=10.0)

    def test_auto_copies_sun(self):
        panel = compute_panel_orientation(TrackingMode.AUTO, self.MANUAL, self.SUN)
        assert (panel.azimuth, panel.elevation) == (self.SUN.azimuth, self.SUN.elevation)

    def test_manual_keeps_operator_pose(self):
        panel = compute_panel_orientation(TrackingMode.MANUAL, self.MANUAL, self.SUN)
        assert panel == self.MANUAL

    def test_accepts_string_mode(self):
        panel = compute_panel_orientation("auto", self.MANUAL, self.SUN)
        assert panel.azimuth == self.SUN.azimuth

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            compute_panel_orientation("sideways", self.MANUAL, self.SUN)

    @pytest.mark.parametrize("azimuth", [0.0, 90.0, 180.0, 270.0, 359.9])
    def test_auto_always_full_efficiency(self, azimuth):
        sun = SunPosition(azimuth=azimuth, elevation=25.0)
        panel = compute_panel_orientation(TrackingMode.AUTO, self.MANUAL, sun)
        assert compute_efficiency(panel, sun) == 100.0


class TestDefaults:
    def test_default_config_values(self):
        c = SimulatorConfig()
        assert c.latitude == 45.0
        assert c.longitude == 0.0
        assert c.panel_azimuth == 0.0
        assert c.panel_elevation == 45.0
        assert c.mode is TrackingMode.MANUAL
        assert DEFAULT_CONFIG == c

    def test_initial_snapshot(self, controller):
        snap = controller.snapshot
        assert snap.mode is TrackingMode.MANUAL
        assert snap.panel == PanelOrientation(azimuth=0.0, elevation=45.0)
        assert snap.sun == compute_sun_position(GeoLocation(45.0, 0.0), SOLSTICE_NOON)
        assert snap.efficiency == compute_efficiency(snap.panel, snap.sun)


class TestModeTransitions:
    def test_entering_auto_snaps_to_sun(self, controller):
        snap = controller.set_mode(TrackingMode.AUTO)
        assert snap.panel.azimuth == snap.sun.azimuth
        assert snap.panel.elevation == snap.sun.elevation
        assert snap.efficiency == 100.0

    def test_auto_follows_new_instant(self, controller):
        controller.set_mode("auto")
        snap = controller.set_instant(EQUINOX_MORNING)
        assert snap.sun == compute_sun_position(GeoLocation(45.0, 0.0), EQUINOX_MORNING)
        assert (snap.panel.azimuth, snap.panel.elevation) == (
            snap.sun.azimuth,
            snap.sun.elevation,
        )

    def test_leaving_auto_keeps_tracked_pose(self, controller):
        tracked = controller.set_mode(TrackingMode.AUTO).panel
        snap = controller.set_mode(TrackingMode.MANUAL)
        assert snap.panel == tracked
        assert controller.manual_orientation == tracked

    def test_manual_pose_superseded_while_auto(self, controller, caplog):
        tracked = controller.set_mode(TrackingMode.AUTO)
        seen = []
        controller.subscribe(seen.append)
        with caplog.at_level(logging.WARNING, logger="solar_alignment.tracking"):
            snap = controller.set_manual_orientation(PanelOrientation(10.0, 10.0))
        assert snap is tracked
        assert controller.manual_orientation == tracked.panel
        assert seen == []
        assert "superseded" in caplog.text

    def test_leaving_auto_with_new_pose_in_one_update(self, controller):
        controller.set_mode(TrackingMode.AUTO)
        snap = controller.update(
            mode=TrackingMode.MANUAL, manual=PanelOrientation(10.0, 10.0)
        )
        assert snap.panel == PanelOrientation(10.0, 10.0)


class TestRecomputation:
    def test_manual_change_reuses_sun(self, controller):
        before = controller.snapshot
        snap = controller.set_manual_orientation(PanelOrientation(180.0, 60.0))
        assert snap.sun is before.sun
        assert snap.efficiency == compute_efficiency(snap.panel, snap.sun)

    def test_location_change_recomputes_sun(self, controller):
        snap = controller.set_location(GeoLocation(-33.9, 0.0))
        assert snap.sun == compute_sun_position(GeoLocation(-33.9, 0.0), SOLSTICE_NOON)
        assert snap.efficiency == compute_efficiency(snap.panel, snap.sun)

    def test_listener_sees_each_change(self, controller):
        seen = []
        controller.subscribe(seen.append)
        controller.set_manual_orientation(PanelOrientation(180.0, 60.0))
        controller.set_mode(TrackingMode.AUTO)
        assert [s.mode for s in seen] == [TrackingMode.MANUAL, TrackingMode.AUTO]
        assert seen[-1] is controller.snapshot

    def test_batched_update_notifies_once(self, controller):
        seen = []
        controller.subscribe(seen.append)
        controller.update(
            location=GeoLocation(10.0, 20.0),
            instant=EQUINOX_MORNING,
            mode=TrackingMode.AUTO,
        )
        assert len(seen) == 1
        assert seen[0].location == GeoLocation(10.0, 20.0)
        assert seen[0].efficiency == 100.0

    def test_unchanged_inputs_do_not_notify(self, controller):
        seen = []
        controller.subscribe(seen.append)
        controller.update()
        controller.set_instant(SOLSTICE_NOON)
        controller.set_mode(TrackingMode.MANUAL)
        assert seen == []

    def test_unsubscribe(self, controller):
        seen = []
        unsubscribe = controller.subscribe(seen.append)
        unsubscribe()
        controller.set_mode(TrackingMode.AUTO)
        assert seen == []


class TestSummarize:
    def test_plain_values(self, controller):
        summary = summarize(controller.set_mode(TrackingMode.AUTO))
        assert summary["mode"] == "auto"
        assert summary["timestamp"] == "2026-06-21T12:00:00"
        assert summary["day_of_year"] == 172
        assert summary["efficiency"] == 100.0
        assert summary["panel_azimuth"] == summary["sun_azimuth"]
        assert summary["sun_elevation"] > 60.0
