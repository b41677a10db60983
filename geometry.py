import math

from model import Origin


def distance(p0, p1) -> float:
    return math.hypot(p1[0] - p0[0], p1[1] - p0[1])


def boundary_check(xp: float, yp: float, x: float, y: float, w: float, h: float,
                   origin: Origin = Origin.C) -> bool:
    """Whether point (xp, yp) lies strictly inside the w x h box whose
    reference point (x, y) sits at `origin` of the box."""
    if origin == Origin.C:
        w2, h2 = w / 2, h / 2
        return x - w2 < xp < x + w2 and y - h2 < yp < y + h2
    if origin == Origin.TL:
        return x < xp < x + w and y < yp < y + h
    if origin == Origin.TR:
        return x - w < xp < x and y < yp < y + h
    if origin == Origin.BL:
        return x < xp < x + w and y - h < yp < y
    if origin == Origin.BR:
        return x - w < xp < x and y - h < yp < y
    raise ValueError(f"Unknown origin option: {origin!r}")


def rect_corners(x: float, y: float, w: float, h: float):
    # tl, tr, br, bl
    return [(x, y), (x + w, y), (x + w, y + h), (x, y + h)]
