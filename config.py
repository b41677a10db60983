# Diameter used both for drawing a vertex and as the hover/grab radius
VERTEX_SIZE = 5
# Half the side of a resize handle's hit box
HANDLE_RADIUS = 5
# Smallest width or height a corner drag can shrink a shape to
MIN_SHAPE_SIZE = 1

DEFAULT_OPACITY = 255
DEFAULT_COLOR = (255, 255, 255)

# Key codes as reported by the host (browser-compatible numbering)
KEY_BACKSPACE = 8
KEY_DELETE = 46

# Background image overlay rectangle (x, y, w, h)
DEFAULT_IMAGE_RECT = (100, 100, 400, 400)

DEFAULT_CANVAS_SIZE = (800, 600)
CANVAS_BACKGROUND = 240
CROSS_STROKE = 150
FRAME_INTERVAL_MS = 16
