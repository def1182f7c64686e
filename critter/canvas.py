"""
Pixel Canvas helpers

A canvas is a 2D numpy int8 array of palette slot indices
(0 = transparent, 1-9 = palette slots). Stages never mutate their input:
they copy, draw on the copy, and hand the copy on. Finished canvases are
frozen (read-only) before they leave the pipeline.
"""

import math
from typing import Iterable, List, Tuple

import numpy as np


CANVAS_DTYPE = np.int8

Point = Tuple[int, int]  # (row, col)


def round_half_up(x: float) -> int:
    """Round .5 away from negative infinity; every stage rounds this way."""
    return int(math.floor(x + 0.5))


def clamp(lo: float, hi: float, value: float) -> float:
    return max(lo, min(hi, value))


def new_canvas(width: int, height: int) -> np.ndarray:
    """Blank (all transparent) canvas of height rows x width columns."""
    return np.zeros((height, width), dtype=CANVAS_DTYPE)


def copy_canvas(canvas: np.ndarray) -> np.ndarray:
    """Writable deep copy of a canvas (works on frozen canvases too)."""
    return np.array(canvas, dtype=CANVAS_DTYPE, copy=True)


def freeze(canvas: np.ndarray) -> np.ndarray:
    """Mark a canvas read-only and return it."""
    canvas.setflags(write=False)
    return canvas


def in_bounds(canvas: np.ndarray, row: int, col: int) -> bool:
    h, w = canvas.shape
    return 0 <= row < h and 0 <= col < w


def set_pixel(canvas: np.ndarray, row: int, col: int, value: int) -> bool:
    """Set a pixel if it lies on the canvas. Returns True when written."""
    if in_bounds(canvas, row, col):
        canvas[row, col] = value
        return True
    return False


def filled_count(canvas: np.ndarray) -> int:
    """Number of non-transparent pixels."""
    return int(np.count_nonzero(canvas))


def points_with_values(canvas: np.ndarray, excluded: Iterable[int] = (0,)) -> List[Point]:
    """All (row, col) whose value is not in `excluded`, in row-major order."""
    mask = ~np.isin(canvas, list(excluded))
    rows, cols = np.nonzero(mask)
    return [(int(r), int(c)) for r, c in zip(rows, cols)]


def canvas_to_lines(canvas: np.ndarray, transparent: str = ".") -> List[str]:
    """Digit-per-pixel text dump, handy for debugging and golden tests."""
    lines = []
    for row in canvas:
        lines.append("".join(transparent if v == 0 else str(int(v)) for v in row))
    return lines
