# sinks.py
"""
Pixel sinks: the things a finished (or in-progress) canvas is handed to.

A sink receives the row-major RGB8 pixel array plus its logical size. The
pygame window in weekend.main is one; ImageFileSink writes the image to disk.
"""
import logging
from pathlib import Path
from typing import Protocol, Union

import numpy as np
from PIL import Image

from weekend.renderer.canvas import Canvas

logger = logging.getLogger(__name__)


class PixelSink(Protocol):
    def present(self, pixels: np.ndarray, width: int, height: int) -> None:
        ...


def present_canvas(sink: PixelSink, canvas: Canvas) -> None:
    """Hand canvas to any pixel sink, as it currently stands."""
    sink.present(canvas.pixels, canvas.width, canvas.height)


def image_from_canvas(canvas: Canvas) -> Image.Image:
    """Copy the canvas into a Pillow RGB image."""
    return Image.fromarray(np.ascontiguousarray(canvas.pixels))


class ImageFileSink:
    """Saves every presented frame to path; the format follows the suffix."""
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def present(self, pixels: np.ndarray, width: int, height: int) -> None:
        if pixels.shape != (height, width, 3):
            raise ValueError(f"Expected pixels of shape {(height, width, 3)}, got {pixels.shape}")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        Image.fromarray(np.ascontiguousarray(pixels, dtype=np.uint8)).save(self.path)
        logger.info("Saved %dx%d image to %s", width, height, self.path)
