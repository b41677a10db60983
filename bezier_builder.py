import logging

from bezier_shape import BezierShape
from config import KEY_BACKSPACE, KEY_DELETE, VERTEX_SIZE
from geometry import distance
from model import (
    BuildMode,
    DrawingSurface,
    EventTopic,
    InteractionState,
    KeyEvent,
)

logger = logging.getLogger(__name__)

DELETE_KEYS = (KEY_BACKSPACE, KEY_DELETE)


class BezierShapeBuilder:
    """Turns pointer and key events into edits of one BezierShape.

    Undo storage holds one batch per edit: an empty batch stands for an
    added vertex, a non-empty one for the vertices a delete removed.
    """

    def __init__(self, vertex_size: float = VERTEX_SIZE,
                 build_mode: BuildMode = BuildMode.ADD_POINT,
                 show_vertices: bool = True):
        self.vertex_size = vertex_size
        self.build_mode = build_mode
        self.show_vertices = show_vertices
        self.bezier = BezierShape()
        self.undo_storage: list[list] = []
        # Index of the vertex being dragged, -1 when none
        self.interacting = -1
        self.state = InteractionState.NEUTRAL
        self.current_mouse = (0.0, 0.0)
        self.last_mouse = (0.0, 0.0)

    def get_rectangular_boundary(self):
        return self.bezier.get_rectangular_boundary()

    def get_interacting(self) -> int:
        return self.interacting

    def get_dim(self):
        return self.bezier.get_dim()

    def set_vertices(self, vertices):
        self.bezier.set_vertices(vertices)

    def clear_vertices(self):
        self.bezier.set_vertices()

    def set_mode(self, mode: BuildMode):
        self.build_mode = mode

    def set_show_vertices(self, show: bool = True):
        self.show_vertices = show

    def scale(self, scale: float = 1):
        self.bezier.scale(scale)

    def shift(self, x: float, y: float):
        self.bezier.shift(x, y)

    def handle_event(self, topic: EventTopic, event=None):
        if topic == EventTopic.MOUSE_PRESSED:
            self.press()
        elif topic == EventTopic.MOUSE_RELEASED:
            self.release()
        elif topic == EventTopic.MOUSE_CLICKED:
            self.click()
        elif topic == EventTopic.KEY_PRESSED:
            self.key_press(event)

    def click(self):
        if self.build_mode != BuildMode.ADD_POINT:
            return
        x, y = self.current_mouse
        self.bezier.push(x, y)
        self.state = InteractionState.NEUTRAL
        self.get_hover_index()
        self.undo_storage.append([])

    def press(self):
        hovering = self.get_hover_index()
        if self.build_mode == BuildMode.EDIT_POINT and hovering >= 0:
            self.state = InteractionState.DRAG
            self.interacting = hovering
            logger.debug("Dragging vertex %d", hovering)
        elif self.build_mode == BuildMode.MOVE:
            self.state = InteractionState.DRAG

    def release(self):
        if self.state == InteractionState.DRAG:
            x, y = self.current_mouse
            if self.build_mode == BuildMode.EDIT_POINT and self.interacting >= 0:
                self.bezier.set_vertex(self.interacting, x, y)
                logger.debug("Committed vertex %d at (%s, %s)", self.interacting, x, y)
            elif self.build_mode == BuildMode.MOVE:
                lx, ly = self.last_mouse
                self.shift(x - lx, y - ly)

        self.cancel_interaction()

    def cancel_interaction(self):
        """Drop any drag in progress without committing it."""
        self.interacting = -1
        self.state = InteractionState.NEUTRAL

    def key_press(self, event: KeyEvent):
        hovering = self.get_hover_index()
        if hovering >= 0 and event is not None and event.key_code in DELETE_KEYS:
            removed = self.bezier.splice(hovering, 1)
            self.undo_storage.append(removed)
            logger.debug("Deleted vertex %d", hovering)

    def undo(self):
        if not self.undo_storage:
            return
        batch = self.undo_storage.pop()
        if not batch:
            self.bezier.pop()
        else:
            # Deleted vertices come back at the end, not at their old index
            self.bezier.concat(batch)
        logger.debug("Undo, %d step(s) left", len(self.undo_storage))

    def update_dragged_point(self):
        if (self.build_mode == BuildMode.EDIT_POINT and
                self.state == InteractionState.DRAG and
                self.interacting >= 0):
            self.bezier.set_vertex(self.interacting, *self.current_mouse)

    def update_dragged_curve(self):
        if self.build_mode == BuildMode.MOVE and self.state == InteractionState.DRAG:
            x, y = self.current_mouse
            lx, ly = self.last_mouse
            self.shift(x - lx, y - ly)

    def get_hover_index(self) -> int:
        # First match wins, not the nearest vertex
        for i, vertex in enumerate(self.bezier.vertices):
            if distance(self.current_mouse, vertex) < self.vertex_size:
                return i
        return -1

    def set_mouse(self, x: float, y: float):
        self.current_mouse = (x, y)

    def update(self, surface: DrawingSurface):
        self.set_mouse(surface.mouse_x, surface.mouse_y)
        self.update_dragged_point()
        self.update_dragged_curve()
        self.last_mouse = self.current_mouse

    def draw_bezier(self, surface: DrawingSurface):
        self.bezier.draw(surface)

    def draw_vertices(self, surface: DrawingSurface):
        if not self.show_vertices:
            return
        for i, (x, y) in enumerate(self.bezier.vertices):
            # Anchors white, control points red
            if i % 3:
                surface.fill(255, 0, 0)
            else:
                surface.fill(255)
            surface.stroke(0)
            surface.ellipse(x, y, self.vertex_size, self.vertex_size)

    def draw_vertex_guide(self, surface: DrawingSurface):
        vertices = self.bezier.vertices
        for v1, v2 in zip(vertices, vertices[1:]):
            surface.line(v1[0], v1[1], v2[0], v2[1])

    def draw(self, surface: DrawingSurface):
        self.draw_bezier(surface)
        self.draw_vertices(surface)
