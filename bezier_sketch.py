import json
import logging
import math
from dataclasses import dataclass
from pathlib import Path

from bezier_builder import BezierShapeBuilder
from box_resizer import BoxResizer, resize_rect
from config import (
    CANVAS_BACKGROUND,
    CROSS_STROKE,
    DEFAULT_COLOR,
    DEFAULT_IMAGE_RECT,
    DEFAULT_OPACITY,
    MIN_SHAPE_SIZE,
    VERTEX_SIZE,
)
from model import BuildMode, Corner, DrawingSurface, EditorMode, EventTopic, PointerEvent

logger = logging.getLogger(__name__)


@dataclass
class Layer:
    builder: BezierShapeBuilder
    opacity: int = DEFAULT_OPACITY
    color: tuple[int, int, int] = DEFAULT_COLOR


class BezierSketch:
    """A stack of shape layers sharing one resizer and an image overlay.

    Layers are drawn in list order, so the last layer is on top. Pointer
    and key events go to the active layer; press and release also reach
    the resizer.
    """

    def __init__(self, build_mode: BuildMode = BuildMode.ADD_POINT):
        self.builder_mode = build_mode
        self.layers: list[Layer] = [Layer(BezierShapeBuilder(VERTEX_SIZE, build_mode))]
        self.active = 0
        self.size = (None, None)
        self.active_only = False
        self.show_vertices = True
        self.show_cross = True
        self.show_guides = False

        self.background_image = None
        self.show_background_image = True
        self.image_rect = tuple(DEFAULT_IMAGE_RECT)

        # Bottom entry is shape editing; image resizing is pushed on top of it
        # together with the build mode to restore afterwards
        self._mode_stack: list[tuple[EditorMode, BuildMode | None]] = [(EditorMode.SHAPE_EDIT, None)]

        self.resizer = BoxResizer()
        self._register_shape_target()
        self.resizer.toggle(build_mode == BuildMode.NONE)

    # Layers

    @property
    def builders(self) -> list[BezierShapeBuilder]:
        return [layer.builder for layer in self.layers]

    def get_active(self) -> BezierShapeBuilder:
        return self.layers[self.active].builder

    def get_active_layer(self) -> Layer:
        return self.layers[self.active]

    def add_shape(self):
        self._leave_active()
        builder = BezierShapeBuilder(VERTEX_SIZE, self.builder_mode, self.show_vertices)
        self.layers.append(Layer(builder))
        self.active = len(self.layers) - 1
        logger.debug("Added layer %d", self.active)

    def delete_active_shape(self):
        self._leave_active()
        del self.layers[self.active]
        logger.debug("Deleted layer %d", self.active)
        if not self.layers:
            self.add_shape()
        self.active = 0

    def demote_layer(self):
        """Move the active layer one step down in the draw order."""
        if self.active == 0:
            return
        self._leave_active()
        self._swap(self.active, self.active - 1)
        self.active -= 1

    def promote_layer(self):
        """Move the active layer one step up in the draw order."""
        if self.active == len(self.layers) - 1:
            return
        self._leave_active()
        self._swap(self.active, self.active + 1)
        self.active += 1

    def _leave_active(self):
        # A drag never follows the pointer onto another layer
        if not self.layers:
            return
        self.get_active().cancel_interaction()
        self.resizer.cancel()

    def _swap(self, i: int, j: int):
        self.layers[i], self.layers[j] = self.layers[j], self.layers[i]

    def left(self):
        self._leave_active()
        self.active = (self.active - 1) % len(self.layers)

    def right(self):
        self._leave_active()
        self.active = (self.active + 1) % len(self.layers)

    def get_active_opacity(self) -> int:
        return self.get_active_layer().opacity

    def set_active_opacity(self, opacity: int):
        self.get_active_layer().opacity = opacity

    def get_active_color(self) -> tuple[int, int, int]:
        return self.get_active_layer().color

    def set_active_color(self, red: int | None = None, green: int | None = None,
                         blue: int | None = None):
        r, g, b = self.get_active_layer().color
        self.get_active_layer().color = (r if red is None else red,
                                         g if green is None else green,
                                         b if blue is None else blue)

    def undo(self):
        self.get_active().undo()

    # Modes and flags

    def set_active_only(self, only: bool = True):
        self.active_only = only

    def get_active_only(self) -> bool:
        return self.active_only

    def set_mode(self, mode: BuildMode):
        self.builder_mode = mode
        self.resizer.toggle(mode == BuildMode.NONE or self.resize_image_mode)
        for builder in self.builders:
            builder.set_mode(mode)

    def set_show_vertices(self, show: bool = True):
        self.show_vertices = show
        for builder in self.builders:
            builder.set_show_vertices(show)

    def set_size(self, w: float, h: float):
        self.size = (w, h)

    @property
    def resize_image_mode(self) -> bool:
        return self._mode_stack[-1][0] == EditorMode.IMAGE_RESIZE

    def toggle_resize_image_mode(self, resize: bool | None = None):
        want = (not self.resize_image_mode) if resize is None else resize
        if want == self.resize_image_mode:
            return
        if want:
            self._mode_stack.append((EditorMode.IMAGE_RESIZE, self.builder_mode))
            self._register_image_target()
            self.set_mode(BuildMode.NONE)
        else:
            _, previous_mode = self._mode_stack.pop()
            self._register_shape_target()
            self.set_mode(previous_mode)
        logger.debug("Image resize mode %s", "on" if want else "off")

    # Resize targets

    def _register_shape_target(self):
        self.resizer.register_object(self, BezierSketch._active_shape_xywh,
                                     self._resize_active_shape)

    def _register_image_target(self):
        self.resizer.register_object(self, BezierSketch._image_xywh,
                                     self._resize_image)

    def _active_shape_xywh(self):
        builder = self.get_active()
        t, _, _, l = builder.get_rectangular_boundary()
        w, h = builder.get_dim()
        if w is None:
            return None
        return (l, t, w, h)

    def _image_xywh(self):
        return self.image_rect

    def _resize_image(self, start, end, corner: Corner):
        self.image_rect = resize_rect(self.image_rect, start, end, corner)

    def _resize_active_shape(self, start, end, corner: Corner):
        builder = self.get_active()
        w, h = builder.get_dim()
        if w is None:
            return
        xd, yd = end[0] - start[0], end[1] - start[1]
        # The edges opposite the dragged corner stay put, and the shape never
        # collapses below MIN_SHAPE_SIZE
        wp = max(w + xd if corner.is_right else w - xd, MIN_SHAPE_SIZE)
        hp = max(h - yd if corner.is_top else h + yd, MIN_SHAPE_SIZE)
        try:
            builder.bezier.set_dim(wp, hp)
        except ZeroDivisionError:
            logger.warning("Cannot resize layer %d: boundary has zero width or height", self.active)
            return
        builder.shift(0 if corner.is_right else w - wp,
                      0 if corner.is_top else hp - h)

    # Events and frames

    def mouse_is_over_canvas(self, x: float, y: float) -> bool:
        w, h = self.size
        if w is None or h is None:
            return False
        return 0 < x < w and 0 < y < h

    def handle_event(self, topic: EventTopic, event=None):
        if isinstance(event, PointerEvent) and not event.on_canvas:
            return
        builder = self.get_active()
        if topic in (EventTopic.MOUSE_PRESSED, EventTopic.MOUSE_RELEASED):
            builder.handle_event(topic, event)
            self.resizer.handle_event(topic, event)
        elif topic in (EventTopic.MOUSE_CLICKED, EventTopic.KEY_PRESSED):
            builder.handle_event(topic, event)

    def _resizer_active(self) -> bool:
        return self.builder_mode == BuildMode.NONE or self.resize_image_mode

    def update(self, surface: DrawingSurface):
        self.get_active().update(surface)
        if self._resizer_active():
            self.resizer.update(surface)

    def draw(self, surface: DrawingSurface):
        surface.background(CANVAS_BACKGROUND)

        if self.show_background_image and self.background_image is not None:
            surface.image(self.background_image, *self.image_rect)

        surface.fill(255)

        # In active only mode the other layers are hidden
        if self.active_only:
            self._draw_layer(surface, self.active)
        else:
            for i in range(len(self.layers)):
                self._draw_layer(surface, i)

        if self._resizer_active():
            self.resizer.draw(surface)

        # Crosshair goes on top of everything
        if self.show_cross:
            self.draw_cross(surface)

    def _draw_layer(self, surface: DrawingSurface, i: int):
        layer = self.layers[i]
        surface.fill(*layer.color, layer.opacity)
        surface.stroke(0)
        if i == self.active:
            if self.show_guides:
                layer.builder.draw_vertex_guide(surface)
            layer.builder.draw(surface)
        else:
            layer.builder.draw_bezier(surface)

    def frame(self, surface: DrawingSurface):
        self.update(surface)
        self.draw(surface)

    def draw_cross(self, surface: DrawingSurface):
        mx, my = surface.mouse_x, surface.mouse_y
        surface.stroke(CROSS_STROKE)
        surface.fill(0)
        surface.line(0, my, surface.width, my)
        surface.line(mx, 0, mx, surface.height)
        surface.no_stroke()
        surface.text(str(math.floor(mx)), mx + 5, 15)
        surface.text(str(math.floor(my)), 10, my - 5)

    # Persistence

    def to_dict(self) -> dict:
        return {
            "layers": [
                {
                    "vertices": [[x, y] for x, y in layer.builder.bezier.get_vertices()],
                    "opacity": layer.opacity,
                    "color": list(layer.color),
                }
                for layer in self.layers
            ],
            "active": self.active,
            "image_rect": list(self.image_rect),
        }

    @classmethod
    def from_dict(cls, data: dict, build_mode: BuildMode = BuildMode.ADD_POINT) -> 'BezierSketch':
        layers = data.get("layers") if isinstance(data, dict) else None
        if not layers:
            raise ValueError("Sketch document has no layers")

        sketch = cls(build_mode=build_mode)
        sketch.layers = []
        for n, entry in enumerate(layers):
            try:
                vertices = [(float(x), float(y)) for x, y in entry.get("vertices", [])]
                color = tuple(int(c) for c in entry.get("color", DEFAULT_COLOR))
                opacity = int(entry.get("opacity", DEFAULT_OPACITY))
            except (AttributeError, TypeError, ValueError) as e:
                raise ValueError(f"Malformed layer {n}: {e}") from e
            if len(color) != 3:
                raise ValueError(f"Malformed layer {n}: color must have 3 components")
            builder = BezierShapeBuilder(VERTEX_SIZE, build_mode, sketch.show_vertices)
            builder.set_vertices(vertices)
            sketch.layers.append(Layer(builder, opacity, color))

        active = data.get("active", 0)
        sketch.active = active if isinstance(active, int) and 0 <= active < len(sketch.layers) else 0
        if "image_rect" in data:
            try:
                x, y, w, h = (float(v) for v in data["image_rect"])
            except (TypeError, ValueError) as e:
                raise ValueError(f"Malformed image_rect: {e}") from e
            sketch.image_rect = (x, y, w, h)
        return sketch

    def save(self, path):
        Path(path).write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")
        logger.info("Saved %d layer(s) to %s", len(self.layers), path)

    @classmethod
    def load(cls, path, build_mode: BuildMode = BuildMode.ADD_POINT) -> 'BezierSketch':
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        sketch = cls.from_dict(data, build_mode)
        logger.info("Loaded %d layer(s) from %s", len(sketch.layers), path)
        return sketch
