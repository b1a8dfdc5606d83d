"""
Rasterizer: paints a Field onto a grid of character cells.

Every cell shows the upper half block glyph. Its foreground colour is the top
sub-row and its background colour the bottom sub-row, so a grid of
``width`` x ``height`` cells displays ``width`` x ``2 * height`` dots.

When several particles land on the same sub-row slot the last one in field
order wins. There is no blending.
"""

import numpy as np
from numba import jit

import config


class CellBuffer:
    """A full frame of cells: glyph, foreground RGB and background RGB."""

    def __init__(self, width, height):
        if width <= 0 or height <= 0:
            raise ValueError(f"buffer size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.glyphs = np.full((height, width), " ", dtype="<U1")
        self.fg = np.zeros((height, width, 3), dtype=np.uint8)
        self.bg = np.zeros((height, width, 3), dtype=np.uint8)

    @property
    def size(self):
        return self.width, self.height

    def to_image(self):
        """RGB picture of the buffer, shape (2 * height, width, 3)."""
        image = np.empty((self.height * 2, self.width, 3), dtype=np.uint8)
        image[0::2] = self.fg
        image[1::2] = self.bg
        return image


def clear(buffer):
    stale = buffer.glyphs != config.UPPER_BLOCK
    if stale.any():
        buffer.glyphs[stale] = config.UPPER_BLOCK
    buffer.fg[:] = 0
    buffer.bg[:] = 0


@jit(nopython=True)
def paint_particles(positions, fg, bg, red_scale, green_scale, blue):
    height = fg.shape[0]
    width = fg.shape[1]
    sub_rows = height * 2

    for i in range(positions.shape[0]):
        x = positions[i, 0]
        y = positions[i, 1]
        if x < 0.0 or y < 0.0 or x >= width or y >= sub_rows:
            continue

        cx = int(x)
        sy = int(y)
        red = int(cx / width * 255.0 * red_scale)
        green = int(sy / sub_rows * 255.0 * green_scale)

        if sy % 2 == 0:
            slot = fg
        else:
            slot = bg
        cy = sy // 2
        slot[cy, cx, 0] = red
        slot[cy, cx, 1] = green
        slot[cy, cx, 2] = blue


def paint(field, buffer):
    if len(field) == 0:
        return
    paint_particles(
        field.positions,
        buffer.fg,
        buffer.bg,
        config.RED_SCALE,
        config.GREEN_SCALE,
        int(255 * config.BLUE_LEVEL),
    )


def render(field, buffer):
    clear(buffer)
    paint(field, buffer)
