import math

from geometry import distance

# The derivative is treated as linear when its leading coefficient is this
# small relative to the other two
EPSILON = 1e-12

MIN_SAMPLES = 32
MAX_SAMPLES = 2000


def evaluate_bezier_component(component, t: float) -> float:
    # A (1-t)^3 + 3 B t (1-t)^2 + 3 C t^2 (1-t) + D t^3
    a, b, c, d = component
    mt = 1 - t
    return (a * mt ** 3 +
            3 * b * t * mt ** 2 +
            3 * c * t ** 2 * mt +
            d * t ** 3)


def find_extrema_parameters(component) -> list[float]:
    """Parameters t in [0, 1] where one axis of a cubic Bezier has a local
    extremum, i.e. the real roots of the quadratic derivative.

    A degenerate quadratic (leading coefficient negligible next to the
    others) falls back to the linear root; a constant derivative has no
    finite roots.
    """
    p1, p2, p3, p4 = component
    a = 3 * (-p1 + 3 * p2 - 3 * p3 + p4)
    b = 6 * (p1 - 2 * p2 + p3)
    c = 3 * (p2 - p1)

    if abs(a) <= EPSILON * max(abs(b), abs(c)):
        if b == 0:
            return []
        roots = [-c / b]
    else:
        term = b * b - 4 * a * c
        # No real roots if the discriminant is negative
        if term < 0:
            return []
        # -b and the root of the discriminant never cancel here
        q = -(b + math.copysign(math.sqrt(term), b)) / 2
        roots = [q / a]
        if q != 0:
            roots.append(c / q)

    # Only the curve's own parameter interval matters
    return [r for r in roots if 0 <= r <= 1]


def sample_bezier(p0, p1, p2, p3, n: int | None = None) -> list[tuple[float, float]]:
    """n + 1 points of the segment, evenly spaced in t.

    Without an explicit n the count follows the control polygon length.
    """
    if n is None:
        est_len = distance(p0, p1) + distance(p1, p2) + distance(p2, p3)
        n = min(max(int(est_len * 1.5), MIN_SAMPLES), MAX_SAMPLES)

    xs = (p0[0], p1[0], p2[0], p3[0])
    ys = (p0[1], p1[1], p2[1], p3[1])
    points = [(evaluate_bezier_component(xs, i / n),
               evaluate_bezier_component(ys, i / n)) for i in range(n)]
    # Land exactly on the end anchor
    points.append((p3[0], p3[1]))
    return points
