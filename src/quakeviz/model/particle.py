"""
Particle System
===============
Short-lived glowing dots emitted around events in the artistic mode.

Classes:
    Particle: One dot with position, velocity, size and remaining life.
    ParticleSystem: Owns the live particles, spawns, ages, caps and draws them.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np
from PySide6.QtCore import Qt
from PySide6.QtGui import QPainter

from quakeviz import config
from quakeviz.render.painting import circle_rect, magnitude_color, qcolor

# Emission probability per event per frame is SPAWN_RATE * magnitude / SPAWN_MAGNITUDE
SPAWN_RATE: float = 0.02
SPAWN_MAGNITUDE: float = 5.0
SHRINK: float = 0.995


@dataclass
class Particle:
    x: float
    y: float
    vx: float
    vy: float
    size: float
    decay: float
    color: str
    life: float = 1.0

    @classmethod
    def spawn(cls, x: float, y: float, magnitude: float, rng: np.random.Generator) -> Particle:
        """Create a particle at (x, y) with random size, drift and decay."""
        vx, vy = (rng.random(2) - 0.5) * 2.0
        return cls(
            x=x,
            y=y,
            vx=float(vx),
            vy=float(vy),
            size=float(rng.random() * 3.0 + 1.0),
            decay=float(rng.random() * 0.02 + 0.01),
            color=magnitude_color(magnitude),
        )

    @property
    def alive(self) -> bool:
        return self.life > 0.0

    def update(self) -> None:
        self.x += self.vx
        self.y += self.vy
        self.life -= self.decay
        self.size *= SHRINK


class ParticleSystem:
    """
    Ordered collection of live particles, oldest first.

    The list is trimmed from the front whenever it grows past `cap`.
    """
    def __init__(self, cap: int = config.MAX_PARTICLES, rng: Optional[np.random.Generator] = None) -> None:
        self.cap = cap
        self.rng = rng if rng is not None else np.random.default_rng()
        self.particles: list[Particle] = []

    def __len__(self) -> int:
        return len(self.particles)

    def __iter__(self):
        return iter(self.particles)

    def spawn(self, x: float, y: float, magnitude: float) -> Particle:
        particle = Particle.spawn(x, y, magnitude, self.rng)
        self.particles.append(particle)
        return particle

    def maybe_spawn(self, x: float, y: float, magnitude: float) -> bool:
        """Spawn with a probability proportional to the magnitude. Returns True if spawned."""
        if self.rng.random() < SPAWN_RATE * (magnitude / SPAWN_MAGNITUDE):
            self.spawn(x, y, magnitude)
            return True
        return False

    def step(self) -> None:
        """Advance every particle one frame and drop the expired ones."""
        for particle in self.particles:
            particle.update()
        self.particles = [p for p in self.particles if p.alive]

    def trim(self) -> None:
        """Drop the oldest particles beyond the cap."""
        excess = len(self.particles) - self.cap
        if excess > 0:
            del self.particles[:excess]

    def clear(self) -> None:
        self.particles.clear()

    def draw(self, painter: QPainter) -> None:
        painter.save()
        painter.setPen(Qt.PenStyle.NoPen)
        for particle in self.particles:
            if not particle.alive:
                continue
            painter.setOpacity(min(1.0, particle.life))
            painter.setBrush(qcolor(particle.color))
            painter.drawEllipse(circle_rect(particle.x, particle.y, particle.size))
        painter.restore()
