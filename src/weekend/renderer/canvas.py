# renderer/canvas.py
import numpy as np

from weekend.core.vector import Colour
from weekend.renderer.tone_mapping import gamma_encode_row


class Canvas:
    """
    The pixel buffer a render pass writes into.

    pixels is a (height, width, 3) uint8 array, row-major RGB with row 0 at
    the top of the image, which is the layout pixel sinks expect. Rows are
    written independently so that each render worker can own a disjoint set
    of them without any locking.
    """
    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.pixels = np.zeros((height, width, 3), dtype=np.uint8)

    def write_row(self, row: int, linear_row: np.ndarray, samples_per_pixel: int):
        """Store one row of summed samples, counted from the top."""
        gamma_encode_row(linear_row, samples_per_pixel, self.pixels[row])

    def set_pixel(self, x: int, row: int, colour: Colour, samples_per_pixel: int):
        linear = np.array([[colour.x, colour.y, colour.z]], dtype=np.float64)
        gamma_encode_row(linear, samples_per_pixel, self.pixels[row, x:x + 1])

    def get_pixel(self, x: int, row: int):
        r, g, b = self.pixels[row, x]
        return int(r), int(g), int(b)

    def clear(self):
        self.pixels.fill(0)

    def __repr__(self) -> str:
        return f"Canvas({self.width}x{self.height})"
