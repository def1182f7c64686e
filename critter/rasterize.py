"""Rasterizer - width map to outline/fill pixels."""

import numpy as np

from .canvas import new_canvas
from .palette import Slot
from .silhouette import WidthMap


def rasterize_silhouette(width_map: WidthMap, canvas_w: int, pixel_h: int) -> np.ndarray:
    """
    Top and bottom filled rows are solid outline; every other filled row
    gets outline at its edge columns and body fill strictly between.
    """
    canvas = new_canvas(canvas_w, pixel_h)

    filled = [r for r, e in enumerate(width_map[:pixel_h]) if e is not None]
    if not filled:
        return canvas
    top_row, bottom_row = filled[0], filled[-1]

    for r in filled:
        entry = width_map[r]
        left = max(0, min(canvas_w - 1, entry.left))
        right = max(0, min(canvas_w - 1, entry.right))
        if r in (top_row, bottom_row):
            canvas[r, left:right + 1] = Slot.OUTLINE
        else:
            canvas[r, left + 1:right] = Slot.BODY
            canvas[r, left] = Slot.OUTLINE
            canvas[r, right] = Slot.OUTLINE
    return canvas
