# ─── Constants ──────────────────────────────────────────────────────────────────
CANVAS_WIDTH = 1000 # Keep for initial window size hint
CANVAS_HEIGHT = 700 # Keep for initial window size hint
CANVAS_BG = 'white'

# Frame defaults (left, top, width, height, label)
FRAME_DEFAULTS = {
    'left': 200,
    'top': 200,
    'width': 300,
    'height': 200,
    'label': 'Click to add image',
}
FRAME_SPACING = 40 # Gap between frames laid out by --frames

# Card styling
FRAME_FILL = '#fafafa'
FRAME_STROKE = 'black'
FRAME_STROKE_WIDTH = 2
FRAME_CORNER_RADIUS = 8
SHADOW_COLOR = '#d6d6d6' # Tk has no alpha, so the 15% black shadow is pre-blended on white
SHADOW_OFFSET = (0, 4)

# Placeholder text
PLACEHOLDER_FONT = ('Helvetica', 16)
PLACEHOLDER_COLOR = '#999999'

# Plain rectangle (create_rectangle)
RECTANGLE_DEFAULTS = {
    'left': 200,
    'top': 200,
    'width': 150,
    'height': 100,
    'fill': 'black',
    'stroke': '#2E7D32',
    'stroke_width': 1,
}

# Selection visuals
SELECTION_OUTLINE = '#555555'
HANDLE_SIZE = 8

# Drag-and-drop hover feedback on the drop zone
DROP_HOVER_STYLE = {'highlightthickness': 3, 'highlightbackground': '#64b5f6', 'highlightcolor': '#64b5f6'}
DROP_IDLE_STYLE = {'highlightthickness': 0}

# Ingestion
IMAGE_FILETYPES = [('Image files', '*.png *.jpg *.jpeg *.gif *.bmp *.webp *.tif *.tiff'), ('All files', '*.*')]
INGEST_WORKERS = 2
FETCH_TIMEOUT = None # seconds; None waits indefinitely
