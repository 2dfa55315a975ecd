#!/usr/bin/env python3
"""
Headless Drive Example

This example demonstrates how to:
1. Generate a seeded track and inspect its geometry
2. Drive a session with scripted intents
3. Record telemetry and read lap data
4. Regenerate the track mid-session

Run with: python drive_track.py
"""

import logging

from neondrive.simulation import ControlIntent, Session
from neondrive.telemetry import TelemetryRecorder


def inspect_track(session: Session) -> None:
    """Print track geometry details."""
    print("=" * 60)
    print("1. Track Geometry")
    print("=" * 60)

    state = session.track.get_state()
    print(f"\nSeed: {state['seed']}")
    print(f"Length: {state['length']:.1f}")
    print(f"Control points: {state['num_points']}")
    print(f"Surface quads: {state['mesh']['surface_quads']}")
    print(f"Marking quads: {state['mesh']['marking_quads']}")
    print(f"Barriers: {state['mesh']['barriers']}")


def scripted_intent(tick: int) -> ControlIntent:
    """Weave left and right, speeding up over the first second."""
    phase = (tick // 120) % 4
    return ControlIntent(
        left=phase == 1,
        right=phase == 3,
        accelerate=tick < 60 and tick % 6 == 0,
    )


def drive(session: Session, recorder: TelemetryRecorder, ticks: int) -> None:
    """Run the session for a number of ticks."""
    print("\n" + "=" * 60)
    print("2. Driving")
    print("=" * 60)

    for tick in range(ticks):
        snapshot = session.step(scripted_intent(tick))
        if tick % 250 == 0:
            print(
                f"tick {snapshot.tick:5d}  lap {snapshot.lap}  "
                f"distance {snapshot.distance:7.1f}  lane {snapshot.lane.value:6s}  "
                f"speed x{snapshot.speed_multiplier:.1f}"
            )

    stats = recorder.get_statistics()
    print(f"\nLaps completed: {recorder.current_lap}")
    print(f"Lateral mean: {stats['lateral'].get('mean')}")


def regenerate(session: Session) -> None:
    """Swap in a new track."""
    print("\n" + "=" * 60)
    print("3. Regeneration")
    print("=" * 60)

    snapshot = session.step(ControlIntent(regenerate_track=True))
    print(f"\nTrack version: {session.track_version}")
    print(f"New length: {session.track.length:.1f}")
    print(f"Distance after respawn: {snapshot.distance:.2f}")


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    session = Session(seed=2024)
    recorder = TelemetryRecorder()
    session.add_post_step_callback(lambda s, snapshot: recorder.record(snapshot))

    inspect_track(session)
    drive(session, recorder, ticks=1500)
    regenerate(session)


if __name__ == "__main__":
    main()
