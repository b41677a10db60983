import logging

from PySide6.QtCore import QPointF, Qt, QTimer
from PySide6.QtGui import QPainter
from PySide6.QtWidgets import QWidget

from bezier_sketch import BezierSketch
from config import FRAME_INTERVAL_MS, KEY_BACKSPACE, KEY_DELETE
from graphics.qt_surface import QtSurface
from model import BuildMode, EventTopic, KeyEvent, PointerEvent

logger = logging.getLogger(__name__)

# Digit keys switch the build mode of every layer
MODE_KEYS = {
    Qt.Key_0: BuildMode.NONE,
    Qt.Key_1: BuildMode.ADD_POINT,
    Qt.Key_2: BuildMode.EDIT_POINT,
    Qt.Key_3: BuildMode.MOVE,
}

KEY_CODES = {
    Qt.Key_Backspace: KEY_BACKSPACE,
    Qt.Key_Delete: KEY_DELETE,
}


class SketchCanvas(QWidget):
    """Hosts a BezierSketch: translates Qt input into sketch events and
    runs one update + draw pass per timer tick."""

    def __init__(self, sketch: BezierSketch | None = None, parent=None):
        super().__init__(parent)
        self.sketch = sketch or BezierSketch()
        self._mouse = QPointF(0, 0)
        self._pressed = False

        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.StrongFocus)

        self._timer = QTimer(self)
        self._timer.timeout.connect(self.update)
        self._timer.start(FRAME_INTERVAL_MS)

    def _pointer_event(self, event) -> PointerEvent:
        pos = event.position()
        return PointerEvent(pos.x(), pos.y(), self.rect().contains(pos.toPoint()))

    def resizeEvent(self, event):
        self.sketch.set_size(self.width(), self.height())
        super().resizeEvent(event)

    def mouseMoveEvent(self, event):
        self._mouse = event.position()
        super().mouseMoveEvent(event)

    def mousePressEvent(self, event):
        if event.button() != Qt.LeftButton:
            super().mousePressEvent(event)
            return
        self._mouse = event.position()
        self._pressed = True
        self.sketch.handle_event(EventTopic.MOUSE_PRESSED, self._pointer_event(event))
        event.accept()

    def mouseReleaseEvent(self, event):
        if event.button() != Qt.LeftButton:
            super().mouseReleaseEvent(event)
            return
        self._mouse = event.position()
        self._pressed = False
        pointer = self._pointer_event(event)
        self.sketch.handle_event(EventTopic.MOUSE_RELEASED, pointer)
        # A release on the canvas completes a click
        self.sketch.handle_event(EventTopic.MOUSE_CLICKED, pointer)
        event.accept()

    def leaveEvent(self, event):
        # The core only leaves a drag on release, so report one when the
        # pointer escapes mid drag
        if self._pressed:
            self._pressed = False
            self.sketch.handle_event(EventTopic.MOUSE_RELEASED,
                                     PointerEvent(self._mouse.x(), self._mouse.y()))
        super().leaveEvent(event)

    def keyPressEvent(self, event):
        key = event.key()
        sketch = self.sketch
        if key == Qt.Key_Z and event.modifiers() & Qt.ControlModifier:
            sketch.undo()
        elif key in MODE_KEYS:
            sketch.set_mode(MODE_KEYS[key])
            logger.info("Build mode %s", MODE_KEYS[key].name)
        elif key == Qt.Key_N:
            sketch.add_shape()
        elif key == Qt.Key_X:
            sketch.delete_active_shape()
        elif key == Qt.Key_I:
            sketch.toggle_resize_image_mode()
        elif key == Qt.Key_G:
            sketch.show_guides = not sketch.show_guides
        elif key == Qt.Key_Left:
            sketch.left()
        elif key == Qt.Key_Right:
            sketch.right()
        elif key == Qt.Key_Up:
            sketch.promote_layer()
        elif key == Qt.Key_Down:
            sketch.demote_layer()
        else:
            sketch.handle_event(EventTopic.KEY_PRESSED, KeyEvent(KEY_CODES.get(key, key)))
        event.accept()

    def paintEvent(self, event):
        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.Antialiasing, True)
            surface = QtSurface(painter, self._mouse.x(), self._mouse.y(),
                                self.width(), self.height())
            self.sketch.frame(surface)
        finally:
            painter.end()
