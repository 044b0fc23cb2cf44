import math
from dataclasses import replace

import pytest

from quakeviz.model.event import Event
from quakeviz.model.particle import ParticleSystem
from quakeviz.render.base import pick_hovered
from quakeviz.render.modes.artistic import (
    ANGULAR_SPEED, INDEX_OFFSET, ArtisticMode, marker_size, orbit_angle, orbit_radius
)


@pytest.fixture
def mode(qapp):
    return ArtisticMode(1000.0, 600.0)


def _expected_xy(tick, index, magnitude, width=1000.0, height=600.0):
    angle = orbit_angle(tick, index)
    radius = orbit_radius(magnitude, min(width, height) * 0.25)
    return width / 2 + math.cos(angle) * radius, height / 2 + math.sin(angle) * radius


def test_orbit_angle_formula_and_range():
    for tick in (0, 1, 100, 10_000, 10_000_000):
        for index in (0, 1, 7, 50):
            angle = orbit_angle(tick, index)
            assert 0.0 <= angle < 2 * math.pi
            raw = tick * ANGULAR_SPEED + index * INDEX_OFFSET
            assert math.cos(angle) == pytest.approx(math.cos(raw))
            assert math.sin(angle) == pytest.approx(math.sin(raw))


def test_orbit_angle_periodic_in_phase():
    # a full turn of phase lands on the same angle
    ticks_per_turn = 2 * math.pi / ANGULAR_SPEED
    a = orbit_angle(0, 3)
    b = (ticks_per_turn * ANGULAR_SPEED + 3 * INDEX_OFFSET) % (2 * math.pi)
    assert a == pytest.approx(b)


def test_radius_grows_with_magnitude():
    assert orbit_radius(7.5, 150.0) > orbit_radius(2.0, 150.0)
    assert orbit_radius(0.0, 150.0) == 150.0


def test_draw_empty_sequence(mode, painter):
    assert mode.draw(painter, (), 10.0, 10.0) is None
    assert mode.tick == 1
    assert mode.hovered is None
    assert mode.wants_pointer_cursor is False


def test_pointer_on_event_marks_it_hovered(mode, painter, event_factory):
    events = [event_factory(magnitude=m) for m in (2.0, 5.0, 7.5)]
    x, y = _expected_xy(1, 1, 5.0)
    hovered = mode.draw(painter, events, x, y)
    assert hovered is not None
    assert hovered.event is events[1]
    assert hovered.hit_radius == pytest.approx(2 * marker_size(5.0))
    assert mode.wants_pointer_cursor is True


def test_pointer_far_away_leaves_hover_unset(mode, painter, event_factory):
    events = [event_factory(magnitude=m) for m in (2.0, 5.0, 7.5)]
    # centre of the ring: farther than twice the hit radius from every marker
    assert mode.draw(painter, events, 500.0, 300.0) is None
    assert mode.hovered is None
    assert mode.wants_pointer_cursor is False


def test_later_event_wins_on_equal_distance(mode, event_factory):
    mode.tick = 1
    a = event_factory(magnitude=3.0)
    b = event_factory(magnitude=3.0)
    pa = mode.place(a, 0)
    pb = mode.place(b, 0)  # same index -> identical position
    assert pick_hovered([pa, pb], pa.x, pa.y) is pb


def test_nearest_of_overlapping_markers_wins(mode, event_factory):
    mode.tick = 1
    big = [event_factory(magnitude=9.0), event_factory(magnitude=9.0)]
    first, second = mode.place(big[0], 0), mode.place(big[1], 1)
    # 40% of the way from the first marker to the second: inside both hit radii
    px = first.x + 0.4 * (second.x - first.x)
    py = first.y + 0.4 * (second.y - first.y)
    assert math.hypot(px - second.x, py - second.y) < second.hit_radius
    assert pick_hovered([first, second], px, py) is first


def test_particle_cap_never_exceeded(qapp, painter, event_factory, always_rng):
    mode = ArtisticMode(1000.0, 600.0, particles=ParticleSystem(cap=80, rng=always_rng))
    events = [event_factory(magnitude=6.0) for _ in range(200)]
    for _ in range(3):
        mode.draw(painter, events, -100.0, -100.0)
        assert len(mode.particles) <= 80
    assert len(mode.particles) == 80


def test_expired_particles_removed_within_frame(qapp, painter):
    mode = ArtisticMode(1000.0, 600.0)
    mode.particles.spawn(100.0, 100.0, 3.0)
    mode.particles.particles[0].life = 0.001
    mode.draw(painter, (), 0.0, 0.0)
    assert len(mode.particles) == 0


def test_malformed_event_is_skipped(mode, painter, event_factory):
    bad = Event(magnitude="not a number", location="Broken", time=event_factory().time, coordinates=(0.0, 0.0))
    good = event_factory(magnitude=4.0)
    placements = mode.layout([bad, good])
    assert [p.event for p in placements] == [good]
    mode.draw(painter, [bad, good], 0.0, 0.0)


def test_reset_restores_initial_state(mode, painter, event_factory):
    for _ in range(5):
        mode.draw(painter, [event_factory(magnitude=7.0)], 0.0, 0.0)
    mode.particles.spawn(1.0, 1.0, 5.0)
    mode.reset()
    assert mode.tick == 0
    assert mode.hovered is None
    assert len(mode.particles) == 0
    assert mode.wants_pointer_cursor is False


def test_tick_increments_per_frame(mode, painter):
    for _ in range(3):
        mode.draw(painter, (), 0.0, 0.0)
    assert mode.tick == 3


def test_event_failing_while_drawn_loses_only_its_marker(painter, event_factory, always_rng):
    mode = ArtisticMode(1000.0, 600.0, particles=ParticleSystem(rng=always_rng))
    # a string magnitude survives float() in place() but breaks the colour lookup
    bad = replace(event_factory(magnitude=5.0), magnitude="5.0")
    good = event_factory(magnitude=4.0)
    assert len(mode.layout([bad, good])) == 2

    painter.setOpacity(0.5)
    mode.draw(painter, [bad, good], 0.0, 0.0)

    assert painter.opacity() == pytest.approx(0.5)
    # only the good event went on to emit a particle
    assert len(mode.particles) == 1
    assert mode.tick == 1


def test_hovered_event_with_broken_tooltip_fields_keeps_frame(painter, event_factory):
    mode = ArtisticMode(1000.0, 600.0)
    bad = replace(event_factory(magnitude=5.0), depth=None)
    x, y = _expected_xy(1, 0, 5.0)

    painter.setOpacity(0.5)
    hovered = mode.draw(painter, [bad], x, y)

    assert hovered is not None and hovered.event is bad
    assert mode.wants_pointer_cursor is True
    assert painter.opacity() == pytest.approx(0.5)
