import math

import numpy as np
import pytest

from rivermesh.interfaces import PathSource
from rivermesh.rails import Rail, RailManager, RailNode, catmull_rom_segment
from rivermesh.types import Vector3


def _square(size: float = 10.0):
    return np.array(
        [(0, 0, 0), (size, 0, 0), (size, size, 0), (0, size, 0)], dtype=np.float64
    )


def test_catmull_rom_passes_through_endpoints():
    p = _square()
    pts = catmull_rom_segment(p[3], p[0], p[1], p[2], np.array([0.0, 1.0]))
    np.testing.assert_allclose(pts[0], p[0], atol=1e-9)
    np.testing.assert_allclose(pts[1], p[1], atol=1e-9)


def test_positions_are_evenly_spaced_closed_loop():
    rail = Rail("square", _square())
    track = rail.positions(1.0)

    closed = np.vstack([track, track[:1]])
    spacing = np.linalg.norm(np.diff(closed, axis=0), axis=1)

    step = rail.length() / len(track)
    assert len(track) == round(rail.length())
    assert step == pytest.approx(1.0, abs=0.05)
    # Chords on a curved loop are a little shorter than the arc step.
    assert spacing.max() <= step + 1e-9
    assert spacing.min() > 0.8 * step


def test_positions_start_at_first_control_point():
    track = Rail("square", _square()).positions(2.0)
    np.testing.assert_allclose(track[0], (0.0, 0.0, 0.0), atol=1e-9)
    # No duplicate closing point.
    assert not np.allclose(track[-1], track[0])


def test_circle_length():
    n = 16
    pts = [(math.cos(2 * math.pi * k / n), math.sin(2 * math.pi * k / n), 0.0) for k in range(n)]
    rail = Rail("circle", np.array(pts) * 20.0)
    assert rail.length() == pytest.approx(2 * math.pi * 20.0, rel=1e-2)


def test_rail_needs_three_points():
    with pytest.raises(ValueError):
        Rail("short", _square()[:2])


def test_invalid_step_size():
    with pytest.raises(ValueError):
        Rail("square", _square()).positions(0.0)


def test_rail_manager_orders_nodes(world):
    square = _square()
    # Insert out of order; `order` decides the loop.
    for order in (2, 0, 3, 1):
        world.create_entity(RailNode("loop", order, Vector3(*square[order])))
    world.create_entity(RailNode("other", 0, Vector3(100.0, 0.0, 0.0)))

    manager = RailManager(world)
    rail = manager.get_rail_from_components("loop", world)

    np.testing.assert_array_equal(rail.control_points, square)
    assert manager.rail_names() == ["loop", "other"]


def test_rail_manager_is_a_path_source(world):
    for order, p in enumerate(_square()):
        world.create_entity(RailNode("loop", order, Vector3(*p)))

    manager = RailManager(world)

    assert isinstance(manager, PathSource)
    track = manager.positions("loop", 2.5)
    assert track.shape[1] == 3
    assert len(track) >= 2


def test_unknown_rail(world):
    with pytest.raises(KeyError, match="No rail named"):
        RailManager(world).positions("missing", 1.0)
