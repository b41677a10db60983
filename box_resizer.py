import logging

from config import HANDLE_RADIUS
from geometry import boundary_check, rect_corners
from model import Corner, DrawingSurface, EventTopic, Origin, PointerEvent, ResizeState

logger = logging.getLogger(__name__)

HANDLE_LABELS = (Corner.TL, Corner.TR, Corner.BR, Corner.BL)


def resize_rect(xywh, start, end, corner: Corner):
    """Apply a drag from start to end on `corner` of an (x, y, w, h) rect.

    The edges opposite the dragged corner stay where they are.
    """
    x, y, w, h = xywh
    xd = end[0] - start[0]
    yd = end[1] - start[1]
    if corner.is_right:
        w += xd
    else:
        w -= xd
        x += xd
    if corner.is_top:
        h -= yd
        y += yd
    else:
        h += yd
    return (x, y, w, h)


class BoxResizer:
    """Corner-handle resizing for whatever object gets registered.

    The resizer never owns the object: it asks `getter(obj)` for the current
    (x, y, w, h) and hands every drag step to `resizer(start, end, corner)`.
    """

    def __init__(self, origin=Origin.TL, handle_radius: float = HANDLE_RADIUS):
        self.on = True
        self.state = ResizeState.NONE
        self.active: Corner | None = None
        self.click_origin: tuple[float, float] | None = None

        self.registered_object = None
        self.obj_getter = None
        self.obj_resizer = None

        self.set_origin(origin)
        self.set_handle_radius(handle_radius)

    def toggle(self, status: bool | None = None):
        self.on = (not self.on) if status is None else status

    def set_origin(self, origin=Origin.TL):
        self.origin = Origin.parse(origin)

    def set_handle_radius(self, handle_radius: float = HANDLE_RADIUS):
        self.handle_radius = handle_radius

    def register_object(self, obj, getter, resizer, origin=None):
        if origin is not None:
            self.set_origin(origin)
        self.registered_object = obj
        self.obj_getter = getter
        self.obj_resizer = resizer
        # A target switch abandons any drag on the previous one
        self.cancel()
        logger.debug("Registered resize target %r", obj)

    def cancel(self):
        self.state = ResizeState.NONE
        self.active = None
        self.click_origin = None

    @property
    def xywh(self):
        if self.obj_getter is not None and self.registered_object is not None:
            return self.obj_getter(self.registered_object)
        return None

    @property
    def corners(self):
        xywh = self.xywh
        if xywh is None or None in xywh:
            return None
        return rect_corners(*xywh)

    def mouse_over_body(self, mx: float, my: float) -> bool:
        xywh = self.xywh
        if xywh is None or None in xywh:
            return False
        x, y, w, h = xywh
        return boundary_check(mx, my, x, y, w, h, self.origin)

    def mouse_over_handle(self, mx: float, my: float) -> Corner | None:
        corners = self.corners
        if corners is None:
            return None
        hd = self.handle_radius * 2
        for label, (x, y) in zip(HANDLE_LABELS, corners):
            if boundary_check(mx, my, x, y, hd, hd):
                return label
        return None

    def handle_event(self, topic: EventTopic, event: PointerEvent):
        if topic == EventTopic.MOUSE_PRESSED:
            self.mouse_pressed(event)
        elif topic == EventTopic.MOUSE_RELEASED:
            self.mouse_released(event)

    def mouse_pressed(self, event: PointerEvent):
        if not self.on:
            return
        corner = self.mouse_over_handle(event.x, event.y)
        if corner is not None:
            self.state = ResizeState.DRAG
            self.active = corner
            self.click_origin = (event.x, event.y)
            logger.debug("Resize drag started on %s", corner.value)

    def mouse_released(self, event: PointerEvent):
        if not self.on:
            return
        if self.obj_resizer is not None and self.state == ResizeState.DRAG:
            self.obj_resizer(self.click_origin, (event.x, event.y), self.active)
        self.state = ResizeState.NONE
        self.active = None
        self.click_origin = None

    def update(self, surface: DrawingSurface):
        if not self.on:
            return
        if self.obj_resizer is not None and self.state == ResizeState.DRAG:
            pointer = (surface.mouse_x, surface.mouse_y)
            self.obj_resizer(self.click_origin, pointer, self.active)
            # Each frame only sees the delta since the previous one
            self.click_origin = pointer

    def draw(self, surface: DrawingSurface):
        corners = self.corners
        if corners is None:
            return
        x, y, w, h = self.xywh
        surface.stroke(0)
        surface.no_fill()
        surface.rect(x, y, w, h)
        r = self.handle_radius
        r2 = r / 2
        surface.fill(0)
        for cx, cy in corners:
            surface.rect(cx - r2, cy - r2, r, r)
