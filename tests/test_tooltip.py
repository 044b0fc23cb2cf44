import itertools
from dataclasses import replace

import pytest

from quakeviz.render.painting import rounded_rect_path, truncate_label
from quakeviz.render.tooltip import TooltipStyle, draw_tooltip, place_tooltip, tooltip_lines


W, H = 1000.0, 600.0


def test_place_above_anchor_when_room():
    p = place_tooltip(500.0, 300.0, 180.0, 90.0, W, H)
    assert p.x == pytest.approx(410.0)
    assert p.y == pytest.approx(300.0 - 90.0 - 10.0)
    assert p.below is False
    # connector from just above the anchor to the box bottom edge
    assert p.connector == pytest.approx((500.0, 297.0, 500.0, 300.0 - 10.0))


def test_flips_below_near_top():
    p = place_tooltip(500.0, 50.0, 180.0, 90.0, W, H)
    assert p.y == pytest.approx(60.0)
    assert p.below is True
    assert p.connector == pytest.approx((500.0, 53.0, 500.0, 60.0))


def test_clamps_left_and_right():
    left = place_tooltip(5.0, 300.0, 180.0, 90.0, W, H)
    assert left.x == pytest.approx(10.0)
    right = place_tooltip(995.0, 300.0, 180.0, 90.0, W, H)
    assert right.x == pytest.approx(W - 180.0 - 10.0)


def test_flipped_box_is_kept_inside_bottom():
    # tiny viewport: flipping below would run off the bottom
    p = place_tooltip(100.0, 60.0, 180.0, 90.0, 300.0, 120.0, margin=10.0)
    assert p.y + p.height <= 120.0 - 10.0 + 1e-9
    assert p.y >= 10.0


def test_connector_offset_is_configurable():
    p = place_tooltip(500.0, 300.0, 200.0, 100.0, W, H, connector_offset=5.0)
    assert p.connector[1] == pytest.approx(295.0)


@pytest.mark.parametrize("viewport", [(1000.0, 600.0), (220.0, 130.0), (400.0, 900.0)])
def test_box_stays_within_margins(viewport):
    vw, vh = viewport
    width, height, margin = 200.0, 100.0, 10.0
    xs = [-50.0, 0.0, 5.0, vw / 2, vw - 5.0, vw, vw + 50.0]
    ys = [-50.0, 0.0, 5.0, 105.0, vh / 2, vh - 5.0, vh, vh + 50.0]
    for ax, ay in itertools.product(xs, ys):
        p = place_tooltip(ax, ay, width, height, vw, vh, margin=margin)
        assert p.x >= margin - 1e-9
        assert p.x + p.width <= vw - margin + 1e-9
        assert p.y >= margin - 1e-9
        assert p.y + p.height <= vh - margin + 1e-9


def test_truncate_label():
    assert truncate_label("Chile Coast", 20) == "Chile Coast"
    assert truncate_label("Ring of Fire, Pacific Ocean", 20) == "Ring of Fire, Pac..."
    assert len(truncate_label("x" * 40, 25)) == 25
    assert truncate_label("x" * 25, 25) == "x" * 25


def test_tooltip_lines(event_factory):
    style = TooltipStyle(width=200.0, height=100.0, label_limit=25, date_format="%Y-%m-%d", date_prefix="Date: ")
    event = event_factory(magnitude=4.56, depth=12.34, location="San Francisco Bay area, California")
    lines = tooltip_lines(event, style)
    assert lines == [
        "Magnitude: 4.6",
        "Location: San Francisco Bay area...",
        "Depth: 12.3 km",
        "Date: 2024-05-01",
    ]


def test_rounded_rect_path_bounds(qapp):
    path = rounded_rect_path(10.0, 20.0, 100.0, 50.0, 8.0)
    rect = path.boundingRect()
    assert rect.x() == pytest.approx(10.0)
    assert rect.y() == pytest.approx(20.0)
    assert rect.width() == pytest.approx(100.0)
    assert rect.height() == pytest.approx(50.0)


def test_draw_tooltip_returns_placement(painter, event_factory):
    style = TooltipStyle(width=180.0, height=90.0, label_limit=20)
    placement = draw_tooltip(painter, event_factory(), 500.0, 300.0, W, H, style)
    assert placement == place_tooltip(500.0, 300.0, 180.0, 90.0, W, H)


def test_draw_tooltip_reads_event_before_saving_painter_state(painter, event_factory):
    style = TooltipStyle(width=180.0, height=90.0, label_limit=20)
    broken = replace(event_factory(), time=None)
    painter.setOpacity(0.5)
    with pytest.raises(AttributeError):
        draw_tooltip(painter, broken, 500.0, 300.0, W, H, style)
    assert painter.opacity() == pytest.approx(0.5)
