from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class BuildMode(Enum):
    NONE = 0
    ADD_POINT = 1
    EDIT_POINT = 2
    MOVE = 3


class InteractionState(Enum):
    NEUTRAL = 0
    HOVER = 1  # Reserved, never entered
    DRAG = 2


class ResizeState(Enum):
    NONE = 0
    DRAG = 1


class Corner(Enum):
    TL = 'tl'
    TR = 'tr'
    BR = 'br'
    BL = 'bl'

    @property
    def is_right(self) -> bool:
        return self in (Corner.TR, Corner.BR)

    @property
    def is_top(self) -> bool:
        return self in (Corner.TL, Corner.TR)


class Origin(Enum):
    # Where the (x, y) of a registered rectangle sits relative to its body
    TL = 'tl'
    TR = 'tr'
    BL = 'bl'
    BR = 'br'
    C = 'c'

    @classmethod
    def parse(cls, value) -> 'Origin':
        """Accepts an Origin, its keyword ('tl', 'c', ...) or the legacy
        integer code (0 tl, 1 tr, 2 bl, 3 br, 4 c)."""
        if isinstance(value, Origin):
            return value
        if isinstance(value, bool):
            raise ValueError(f"Unknown origin option: {value!r}")
        if isinstance(value, int):
            codes = (cls.TL, cls.TR, cls.BL, cls.BR, cls.C)
            if 0 <= value < len(codes):
                return codes[value]
            raise ValueError(f"Unknown origin option: {value!r}")
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Unknown origin option: {value!r}") from None


class EditorMode(Enum):
    SHAPE_EDIT = 0
    IMAGE_RESIZE = 1


class EventTopic(Enum):
    MOUSE_PRESSED = 'mousePressed'
    MOUSE_RELEASED = 'mouseReleased'
    MOUSE_CLICKED = 'mouseClicked'
    KEY_PRESSED = 'keyPressed'


@dataclass(frozen=True)
class PointerEvent:
    """Pointer press/release/click in canvas coordinates.

    on_canvas is False when the host saw the event originate outside the
    canvas element; the sketch ignores such events.
    """
    x: float
    y: float
    on_canvas: bool = True


@dataclass(frozen=True)
class KeyEvent:
    key_code: int


class DrawingSurface(Protocol):
    """What the core needs from the rendering host.

    Mirrors a p5-style immediate mode API: pointer state plus drawing
    primitives. Colors are gray levels or (r, g, b[, a]) components.
    """
    mouse_x: float
    mouse_y: float
    width: float
    height: float

    def background(self, *color) -> None: ...
    def fill(self, *color) -> None: ...
    def no_fill(self) -> None: ...
    def stroke(self, *color) -> None: ...
    def no_stroke(self) -> None: ...
    def begin_shape(self) -> None: ...
    def vertex(self, x: float, y: float) -> None: ...
    def bezier_vertex(self, x1: float, y1: float, x2: float, y2: float, x3: float, y3: float) -> None: ...
    def end_shape(self) -> None: ...
    def line(self, x1: float, y1: float, x2: float, y2: float) -> None: ...
    def ellipse(self, x: float, y: float, w: float, h: float) -> None: ...
    def rect(self, x: float, y: float, w: float, h: float) -> None: ...
    def text(self, s: str, x: float, y: float) -> None: ...
    def image(self, img, x: float, y: float, w: float, h: float) -> None: ...
