"""Tests for the NeonDrive telemetry module."""

import pytest
import numpy as np

from neondrive.camera.state import CameraMode
from neondrive.simulation.intent import ControlIntent
from neondrive.simulation.session import Session
from neondrive.telemetry.channel import ChannelConfig, TelemetryChannel
from neondrive.telemetry.recorder import RecorderConfig, TelemetryRecorder
from neondrive.telemetry.snapshot import LanePosition, TelemetrySnapshot, classify_lane


class TestLaneClassification:
    """Test the lateral deadband."""

    @pytest.mark.parametrize("lateral,lane", [
        (0.0, LanePosition.CENTER),
        (0.2, LanePosition.CENTER),
        (-0.2, LanePosition.CENTER),
        (0.21, LanePosition.RIGHT),
        (-0.5, LanePosition.LEFT),
    ])
    def test_classify(self, lateral, lane):
        assert classify_lane(lateral) is lane


class TestTelemetryChannel:
    """Test a single channel."""

    def test_statistics(self):
        """Test running statistics."""
        channel = TelemetryChannel(name="speed")
        for i, value in enumerate([1.0, 2.0, 3.0]):
            channel.record(float(i), value)

        assert channel.count == 3
        assert channel.mean == 2.0
        assert channel.min_value == 1.0
        assert channel.max_value == 3.0
        assert channel.last_value == 3.0

    def test_clipping(self):
        """Test values are clipped to the configured range."""
        channel = TelemetryChannel(ChannelConfig("lateral", min_value=-1.0, max_value=1.0))
        channel.record(0.0, 4.0)

        assert channel.last_value == 1.0

    def test_bounded_history(self):
        """Test old samples drop out of the retained history."""
        channel = TelemetryChannel(ChannelConfig("x", history=5))
        for i in range(10):
            channel.record(float(i), float(i))

        assert len(channel.get_values()) == 5
        assert channel.count == 10
        times, values = channel.get_range(6.0, 8.0)
        assert np.array_equal(values, [6.0, 7.0, 8.0])


class TestTelemetryRecorder:
    """Test snapshot recording."""

    def test_records_session(self):
        """Test a recorder fed from session callbacks."""
        session = Session(seed=2)
        recorder = TelemetryRecorder()
        session.add_post_step_callback(lambda s, snapshot: recorder.record(snapshot))

        for _ in range(20):
            session.step(ControlIntent(right=True))

        assert recorder.get_channel("distance").count == 20
        assert recorder.get_current_values()["lane"] == 1.0
        assert recorder.get_state()["total_samples"] == 20 * len(recorder.channels)

    def test_decimation(self):
        """Test every_n_ticks skips samples."""
        recorder = TelemetryRecorder(RecorderConfig(every_n_ticks=2))
        for tick in range(1, 11):
            recorder.record(TelemetrySnapshot(tick=tick, time=tick / 60))

        assert recorder.get_channel("distance").count == 5

    def test_lap_data(self):
        """Test per-lap queries split at the lap boundary."""
        recorder = TelemetryRecorder()
        for tick in range(1, 7):
            lap = 0 if tick <= 3 else 1
            recorder.record(TelemetrySnapshot(tick=tick, time=float(tick), distance=float(tick), lap=lap))

        _, first = recorder.get_lap_data(0, "distance")
        _, second = recorder.get_lap_data(1, "distance")

        assert recorder.current_lap == 1
        assert np.array_equal(first, [1.0, 2.0, 3.0])
        assert np.array_equal(second, [4.0, 5.0, 6.0])

    def test_lap_data_across_regeneration(self):
        """Test a new track starts a new lap even though its lap count restarts."""
        recorder = TelemetryRecorder()
        sequence = [(1, 0)] * 3 + [(1, 1)] * 2 + [(2, 0)] * 2 + [(2, 1)] * 2
        for tick, (version, lap) in enumerate(sequence, start=1):
            recorder.record(TelemetrySnapshot(
                tick=tick, time=float(tick), distance=float(tick),
                lap=lap, track_version=version,
            ))

        assert recorder.current_lap == 3
        _, on_first_track = recorder.get_lap_data(1, "distance")
        _, on_new_track = recorder.get_lap_data(2, "distance")
        _, last = recorder.get_lap_data(3, "distance")

        assert np.array_equal(on_first_track, [4.0, 5.0])
        assert np.array_equal(on_new_track, [6.0, 7.0])
        assert np.array_equal(last, [8.0, 9.0])

    def test_session_laps_after_regeneration(self):
        """Test laps driven after a regeneration are all recorded."""
        session = Session(seed=5)
        recorder = TelemetryRecorder()
        session.add_post_step_callback(lambda s, snapshot: recorder.record(snapshot))

        while session.vehicle.lap < 1:
            session.step()
        session.step(ControlIntent(regenerate_track=True))
        while session.vehicle.lap < 1:
            session.step()

        # Lap 0, lap 1 on the first track, then lap 0 and lap 1 on the new one
        assert recorder.current_lap == 3
        times, _ = recorder.get_lap_data(3, "distance")
        assert len(times) > 0

    def test_snapshot_as_dict(self):
        """Test snapshot flattening."""
        snapshot = TelemetrySnapshot(camera_mode=CameraMode.FREE, lane=LanePosition.LEFT)
        data = snapshot.as_dict()

        assert data["camera_mode"] == "free"
        assert data["lane"] == "left"
        assert data["camera_position"] == [0.0, 0.0, 0.0]
