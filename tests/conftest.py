"""
Pytest configuration and shared fixtures for the Bezier builder tests.
"""

import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from bezier_shape import BezierShape
from bezier_builder import BezierShapeBuilder
from model import BuildMode


class RecordingSurface:
    """Drawing surface that records every primitive call as (name, args)."""

    def __init__(self, mouse_x: float = 0.0, mouse_y: float = 0.0,
                 width: float = 800, height: float = 600):
        self.mouse_x = mouse_x
        self.mouse_y = mouse_y
        self.width = width
        self.height = height
        self.calls = []

    def move_mouse(self, x: float, y: float):
        self.mouse_x = x
        self.mouse_y = y

    def names(self) -> list[str]:
        return [name for name, _ in self.calls]

    def of(self, name: str) -> list[tuple]:
        return [args for n, args in self.calls if n == name]

    def __getattr__(self, name):
        # Only reached for primitives, attributes above are found normally
        if name.startswith('_'):
            raise AttributeError(name)

        def record(*args):
            self.calls.append((name, args))
        return record


# ============== Surface Fixtures ==============

@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface()


# ============== Shape Fixtures ==============

@pytest.fixture
def s_curve() -> BezierShape:
    """One segment, S-like curve whose y extrema sit on the anchors."""
    return BezierShape([(0, 0), (10, 0), (20, 10), (30, 10)])


@pytest.fixture
def two_segment_shape() -> BezierShape:
    """Two segments with interior extrema on both axes."""
    return BezierShape([
        (0, 0), (-20, 40), (60, 60), (50, 10),
        (40, -30), (90, -10), (100, 20),
    ])


@pytest.fixture
def edit_builder() -> BezierShapeBuilder:
    builder = BezierShapeBuilder(build_mode=BuildMode.EDIT_POINT)
    builder.set_vertices([(0, 0), (20, 0), (40, 20), (60, 20)])
    return builder
