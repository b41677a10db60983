from algorithms import evaluate_bezier_component, find_extrema_parameters
from model import DrawingSurface

Vertex = tuple[float, float]
Boundary = tuple[float | None, float | None, float | None, float | None]

UNDEFINED_BOUNDARY: Boundary = (None, None, None, None)


def _as_vertices(vertices) -> list[Vertex]:
    return [(float(v[0]), float(v[1])) for v in vertices]


class BezierShape:
    """A piecewise cubic Bezier curve stored as one flat vertex list.

    Vertices 3k..3k+3 form segment k, so neighbouring segments share their
    anchor. The cached rect is (top, right, bottom, left) of the rendered
    curve, or all None while there is no complete segment.
    """

    def __init__(self, vertices=None):
        self.vertices: list[Vertex] = _as_vertices(vertices or [])
        self.rect: Boundary = self.compute_rectangle()

    def _has_rect(self) -> bool:
        return None not in self.rect

    def set_position(self, x: float, y: float):
        """Move the shape so its bottom-left corner lands on (x, y)."""
        # Nothing to position until there is a boundary
        if not self._has_rect():
            return
        t, r, b, l = self.rect
        shift_x = x - l
        shift_y = y - b
        self.apply_to_vertices(lambda v: (v[0] + shift_x, v[1] + shift_y))
        self.rect = (t + shift_y, r + shift_x, b + shift_y, l + shift_x)

    def set_dim(self, w: float, h: float | None = None):
        """Stretch the shape to a w x h boundary keeping its bottom-left corner.

        A shape with zero width or height cannot be stretched and raises
        ZeroDivisionError.
        """
        if not self._has_rect():
            return
        if h is None:
            h = w
        t, r, b, l = self.rect
        width = abs(r - l)
        height = abs(b - t)
        scale_w = w / width
        scale_h = h / height
        cx = l + width / 2
        cy = t + height / 2

        self.apply_to_vertices(lambda v: (scale_w * (v[0] - cx) + cx,
                                          scale_h * (v[1] - cy) + cy))
        # Scaling moves the curve extrema relative to the control points
        self.rect = self.compute_rectangle()
        self.set_position(l, b)

    def get_dim(self) -> tuple[float | None, float | None]:
        if not self._has_rect():
            return (None, None)
        t, r, b, l = self.rect
        return (abs(r - l), abs(b - t))

    def set_vertices(self, vertices=None):
        self.vertices = _as_vertices(vertices or [])
        self.rect = self.compute_rectangle()

    def get_vertex(self, i: int) -> Vertex | None:
        if not 0 <= i < len(self.vertices):
            return None
        return self.vertices[i]

    def get_rectangular_boundary(self) -> Boundary:
        return tuple(self.rect)

    def compute_rectangle(self) -> Boundary:
        n_curves = self.get_n_curves()
        if n_curves < 1:
            return UNDEFINED_BOUNDARY

        # Candidate coordinates for the minima and maxima of each axis
        x_prospects = []
        y_prospects = []
        for i in range(n_curves):
            bez = self.get_bezier(i)
            x_component = [v[0] for v in bez]
            y_component = [v[1] for v in bez]
            x_prospects.extend(evaluate_bezier_component(x_component, t)
                               for t in find_extrema_parameters(x_component))
            y_prospects.extend(evaluate_bezier_component(y_component, t)
                               for t in find_extrema_parameters(y_component))
            x_prospects += [bez[0][0], bez[3][0]]
            y_prospects += [bez[0][1], bez[3][1]]

        return (min(y_prospects), max(x_prospects),
                max(y_prospects), min(x_prospects))

    def push(self, x: float, y: float):
        self.vertices.append((float(x), float(y)))
        self.rect = self.compute_rectangle()

    def set_vertex(self, i: int, x: float, y: float) -> bool:
        if not 0 <= i < len(self.vertices):
            return False
        self.vertices[i] = (float(x), float(y))
        self.rect = self.compute_rectangle()
        return True

    def pop(self) -> Vertex | None:
        vertex = self.vertices.pop() if self.vertices else None
        self.rect = self.compute_rectangle()
        return vertex

    def concat(self, vertices):
        self.vertices.extend(_as_vertices(vertices))
        self.rect = self.compute_rectangle()

    def splice(self, start: int, delete_count: int | None = None, replace=None) -> list[Vertex]:
        """Remove delete_count vertices from start (all remaining when None),
        put `replace` in their place and return the removed vertices."""
        assert 0 <= start <= len(self.vertices), f"splice start {start} out of range"
        end = len(self.vertices) if delete_count is None else start + max(0, delete_count)
        removed = self.vertices[start:end]
        self.vertices[start:end] = _as_vertices(replace or [])
        # TODO: keep per-segment extrema so removals only rescan the cached
        # segment boundaries instead of every curve
        self.rect = self.compute_rectangle()
        return removed

    def insert(self, start: int, vertices):
        self.splice(start, 0, vertices)

    def apply_to_vertices(self, f):
        self.vertices = [tuple(f(v)) for v in self.vertices]

    def shift(self, x: float, y: float = 0):
        if not self._has_rect():
            return
        t, r, b, l = self.rect
        self.apply_to_vertices(lambda v: (v[0] + x, v[1] + y))
        self.rect = (t + y, r + x, b + y, l + x)

    def scale(self, scale: float):
        if not self._has_rect():
            return
        t, r, b, l = self.rect
        cx = l + abs(r - l) / 2
        cy = t + abs(b - t) / 2
        self.apply_to_vertices(lambda v: (scale * (v[0] - cx) + cx,
                                          scale * (v[1] - cy) + cy))
        self.rect = self.compute_rectangle()

    def get_vertices(self) -> list[Vertex]:
        return self.vertices

    def get_n_curves(self) -> int:
        # Incomplete trailing curves are not counted
        return max(0, (len(self.vertices) - 1) // 3)

    def get_n_vertices(self) -> int:
        return len(self.vertices)

    def get_bezier(self, i: int) -> list[Vertex]:
        if i < 0:
            return []
        idx = i * 3
        return self.vertices[idx:idx + 4]

    def get_anchors(self, i: int) -> tuple[Vertex | None, Vertex | None]:
        bez = self.get_bezier(i)
        if len(bez) < 4:
            return (bez[0] if bez else None, None)
        return (bez[0], bez[3])

    def get_controls(self, i: int) -> tuple[Vertex | None, Vertex | None]:
        bez = self.get_bezier(i)
        return (bez[1] if len(bez) > 1 else None,
                bez[2] if len(bez) > 2 else None)

    def draw(self, surface: DrawingSurface):
        if not self.vertices:
            return
        surface.begin_shape()
        surface.vertex(*self.vertices[0])
        for i in range(self.get_n_curves()):
            _, c1, c2, a2 = self.get_bezier(i)
            surface.bezier_vertex(c1[0], c1[1], c2[0], c2[1], a2[0], a2[1])
        surface.end_shape()
