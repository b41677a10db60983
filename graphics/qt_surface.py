from PySide6.QtCore import QPointF, QRectF, Qt
from PySide6.QtGui import QBrush, QColor, QPainter, QPainterPath, QPen


def to_qcolor(*color) -> QColor:
    """p5 style color arguments: gray, gray + alpha, rgb or rgba."""
    if len(color) == 1 and isinstance(color[0], QColor):
        return color[0]
    values = [int(round(c)) for c in color]
    if len(values) == 1:
        return QColor(values[0], values[0], values[0])
    if len(values) == 2:
        return QColor(values[0], values[0], values[0], values[1])
    if len(values) in (3, 4):
        return QColor(*values)
    raise ValueError(f"Expected 1 to 4 color components, got {len(values)}")


class QtSurface:
    """Drawing surface backed by a QPainter for the duration of one frame."""

    def __init__(self, painter: QPainter, mouse_x: float = 0.0, mouse_y: float = 0.0,
                 width: float = 0.0, height: float = 0.0):
        self.painter = painter
        self.mouse_x = mouse_x
        self.mouse_y = mouse_y
        self.width = width
        self.height = height
        self._path: QPainterPath | None = None

    def background(self, *color):
        self.painter.fillRect(QRectF(0, 0, self.width, self.height), to_qcolor(*color))

    def fill(self, *color):
        self.painter.setBrush(QBrush(to_qcolor(*color)))

    def no_fill(self):
        self.painter.setBrush(Qt.NoBrush)

    def stroke(self, *color):
        self.painter.setPen(QPen(to_qcolor(*color)))

    def no_stroke(self):
        self.painter.setPen(Qt.NoPen)

    def begin_shape(self):
        self._path = QPainterPath()

    def vertex(self, x: float, y: float):
        if self._path is None:
            return
        if self._path.elementCount() == 0:
            self._path.moveTo(x, y)
        else:
            self._path.lineTo(x, y)

    def bezier_vertex(self, x1: float, y1: float, x2: float, y2: float, x3: float, y3: float):
        if self._path is None:
            return
        self._path.cubicTo(QPointF(x1, y1), QPointF(x2, y2), QPointF(x3, y3))

    def end_shape(self):
        if self._path is not None:
            self.painter.drawPath(self._path)
        self._path = None

    def line(self, x1: float, y1: float, x2: float, y2: float):
        self.painter.drawLine(QPointF(x1, y1), QPointF(x2, y2))

    def ellipse(self, x: float, y: float, w: float, h: float):
        # (x, y) is the center, as in p5's default ellipse mode
        self.painter.drawEllipse(QPointF(x, y), w / 2, h / 2)

    def rect(self, x: float, y: float, w: float, h: float):
        self.painter.drawRect(QRectF(x, y, w, h))

    def text(self, s: str, x: float, y: float):
        self.painter.drawText(QPointF(x, y), s)

    def image(self, img, x: float, y: float, w: float, h: float):
        self.painter.drawImage(QRectF(x, y, w, h), img)
