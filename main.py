import argparse
import logging
import sys
from pathlib import Path

from PySide6.QtGui import QImage, QKeySequence, QShortcut
from PySide6.QtWidgets import QApplication, QMainWindow

from bezier_sketch import BezierSketch
from config import DEFAULT_CANVAS_SIZE
from graphics.sketch_canvas import SketchCanvas

logger = logging.getLogger(__name__)


def setup_logging(debug: bool = False):
    level = logging.DEBUG if debug else logging.INFO
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)
    logger.info("Logging initialized at %s level", 'DEBUG' if debug else 'INFO')


class MainWindow(QMainWindow):
    def __init__(self, sketch: BezierSketch, file: Path | None = None):
        super().__init__()
        self.setWindowTitle("Bezier Shape Builder")
        self.file = file

        self.canvas = SketchCanvas(sketch, self)
        self.setCentralWidget(self.canvas)

        save = QShortcut(QKeySequence.Save, self)
        save.activated.connect(self.save)

    def save(self):
        if self.file is None:
            logger.warning("No --file given, nothing saved")
            return
        self.canvas.sketch.save(self.file)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Interactive cubic Bezier shape builder')
    parser.add_argument('--file', type=Path, help='Sketch JSON to load at start and save with Ctrl+S')
    parser.add_argument('--image', type=Path, help='Background image to trace over')
    parser.add_argument('--width', type=int, default=DEFAULT_CANVAS_SIZE[0])
    parser.add_argument('--height', type=int, default=DEFAULT_CANVAS_SIZE[1])
    parser.add_argument('--full-screen', action='store_true', help='Use the whole screen as canvas')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    return parser.parse_args(argv)


def create_window(args) -> MainWindow:
    if args.file is not None and args.file.exists():
        sketch = BezierSketch.load(args.file)
    else:
        sketch = BezierSketch()

    if args.image is not None:
        image = QImage(str(args.image))
        if image.isNull():
            logger.error("Could not load image %s", args.image)
        else:
            sketch.background_image = image

    window = MainWindow(sketch, args.file)
    window.resize(args.width, args.height)
    # The canvas picks up the screen size through its resize events
    if args.full_screen:
        window.showFullScreen()
    else:
        window.show()
    return window


def main():
    args = parse_args()
    setup_logging(debug=args.debug)

    app = QApplication(sys.argv)
    window = create_window(args)
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
