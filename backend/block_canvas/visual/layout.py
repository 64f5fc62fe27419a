from block_canvas.visual.visual_schema import Position

# Reading order: power on the left, inputs top-left-center, processing in
# the middle, outputs top-right, peripherals below processing.
BLOCK_POSITIONS = {
    "power": (50, 200),
    "inputs": (350, 50),
    "processing": (650, 200),
    "outputs": (950, 50),
    "peripherals": (650, 400),
}

DEFAULT_POSITION = (400, 200)


def position_for(block_type: str) -> Position:
    """
    Fixed canvas coordinate for a block category.

    Not derived from the graph. Called once per block when a diagram is
    loaded; after that the node owns its position and user drags win.
    """
    x, y = BLOCK_POSITIONS.get(block_type, DEFAULT_POSITION)
    return Position(x=x, y=y)
