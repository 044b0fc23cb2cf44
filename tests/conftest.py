import os
from datetime import datetime, timezone

import numpy as np
import pytest

# Must be set before the first QApplication is created
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtGui import QImage, QPainter
from PySide6.QtWidgets import QApplication

from quakeviz.model.event import Event


@pytest.fixture(scope="session")
def qapp():
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


@pytest.fixture
def painter(qapp):
    """Painter on a 1000x600 image, ended after the test."""
    image = QImage(1000, 600, QImage.Format.Format_ARGB32_Premultiplied)
    p = QPainter(image)
    yield p
    p.end()


class AlwaysRng:
    """Stand-in for np.random.Generator whose draws are always zero."""
    def random(self, size=None):
        if size is None:
            return 0.0
        return np.zeros(size)

    def choice(self, seq):
        return seq[0]


@pytest.fixture
def always_rng():
    return AlwaysRng()


def make_event(
    magnitude: float = 4.0,
    longitude: float = 0.0,
    latitude: float = 0.0,
    depth: float = 10.0,
    location: str = "Somewhere",
    hour: int = 12,
) -> Event:
    return Event(
        magnitude=magnitude,
        location=location,
        time=datetime(2024, 5, 1, hour, 0, tzinfo=timezone.utc),
        coordinates=(longitude, latitude, depth),
        depth=depth,
        category="earthquake",
        status="reviewed",
    )


@pytest.fixture
def event_factory():
    return make_event
