import numpy as np
import pytest

from quakeviz.model.particle import Particle, ParticleSystem
from quakeviz.render.painting import magnitude_color


def test_spawn_ranges():
    rng = np.random.default_rng(7)
    for _ in range(200):
        p = Particle.spawn(10.0, 20.0, 5.0, rng)
        assert 1.0 <= p.size < 4.0
        assert -1.0 <= p.vx < 1.0
        assert -1.0 <= p.vy < 1.0
        assert 0.01 <= p.decay < 0.03
        assert p.life == 1.0
        assert p.color == magnitude_color(5.0)


def test_update_moves_ages_and_shrinks():
    p = Particle(x=0.0, y=0.0, vx=1.0, vy=-0.5, size=2.0, decay=0.1, color="#FF0000")
    p.update()
    assert (p.x, p.y) == (1.0, -0.5)
    assert p.life == pytest.approx(0.9)
    assert p.size == pytest.approx(2.0 * 0.995)


def test_step_removes_expired_in_same_frame():
    system = ParticleSystem(cap=10)
    system.particles = [
        Particle(x=0, y=0, vx=0, vy=0, size=1, decay=0.01, color="#fff", life=0.005),
        Particle(x=0, y=0, vx=0, vy=0, size=1, decay=0.01, color="#fff", life=0.5),
    ]
    system.step()
    assert len(system) == 1
    assert all(p.life > 0 for p in system)


def test_trim_drops_oldest(always_rng):
    system = ParticleSystem(cap=3, rng=always_rng)
    for i in range(5):
        system.spawn(float(i), 0.0, 3.0)
    system.trim()
    assert len(system) == 3
    assert [p.x for p in system] == [2.0, 3.0, 4.0]


def test_maybe_spawn_probability_scales_with_magnitude(always_rng):
    system = ParticleSystem(rng=always_rng)
    # zero magnitude -> probability zero, even for a zero draw
    assert system.maybe_spawn(0.0, 0.0, 0.0) is False
    assert system.maybe_spawn(0.0, 0.0, 5.0) is True
    assert len(system) == 1


def test_maybe_spawn_rate_is_plausible():
    system = ParticleSystem(cap=100000, rng=np.random.default_rng(1))
    trials = 20000
    spawned = sum(system.maybe_spawn(0.0, 0.0, 5.0) for _ in range(trials))
    assert spawned / trials == pytest.approx(0.02, abs=0.006)


def test_clear():
    system = ParticleSystem()
    system.spawn(0.0, 0.0, 4.0)
    system.clear()
    assert len(system) == 0
