"""
Pattern Overlay - body-only texture pass

Recolors body-fill pixels (Slot.BODY) inside the body rows. Outline, eyes,
mouth and appendages are never touched.

    STRIPES   bands every max(2, round(6 - 4d)) rows
    SPOTS     per-pixel chance d * 0.3 (two draws per candidate hit)
    GRADIENT  rows past fraction 1 - d
    CHECKER   cells of max(1, round(4 - 3d))
    SWIRL     sin(3 * angle + dist * freq) > 0.3, one draw for the phase

d = gated pattern density.
"""

import math
from typing import Callable, Dict

import numpy as np

from .canvas import copy_canvas, round_half_up
from .palette import Slot
from .params import CreatureParams, PatternType
from .rng import Rng
from .silhouette import Bounds


def _body_rows(canvas: np.ndarray, body: Bounds) -> range:
    return range(max(0, body.top), min(canvas.shape[0] - 1, body.bottom) + 1)


def _is_fill(canvas: np.ndarray, row: int, col: int) -> bool:
    return canvas[row, col] == Slot.BODY


def apply_stripes(canvas: np.ndarray, body: Bounds, density: float, rng: Rng) -> None:
    interval = max(2, round_half_up(6 - density * 4))
    for r in _body_rows(canvas, body):
        if ((r - body.top) // interval) % 2 == 1:
            row = canvas[r]
            row[row == Slot.BODY] = Slot.BODY_SECONDARY


def apply_spots(canvas: np.ndarray, body: Bounds, density: float, rng: Rng) -> None:
    chance = density * 0.3
    for r in _body_rows(canvas, body):
        for c in range(canvas.shape[1]):
            if _is_fill(canvas, r, c) and rng() < chance:
                canvas[r, c] = Slot.ACCENT_A if rng() > 0.7 else Slot.BODY_SECONDARY


def apply_gradient(canvas: np.ndarray, body: Bounds, density: float, rng: Rng) -> None:
    span = body.bottom - body.top
    if span <= 0:
        return
    for r in _body_rows(canvas, body):
        if (r - body.top) / span > 1 - density:
            row = canvas[r]
            row[row == Slot.BODY] = Slot.BODY_SECONDARY


def apply_checker(canvas: np.ndarray, body: Bounds, density: float, rng: Rng) -> None:
    cell = max(1, round_half_up(4 - density * 3))
    for r in _body_rows(canvas, body):
        for c in range(canvas.shape[1]):
            if _is_fill(canvas, r, c) and (r // cell + c // cell) % 2 == 0:
                canvas[r, c] = Slot.BODY_SECONDARY


def apply_swirl(canvas: np.ndarray, body: Bounds, density: float, rng: Rng) -> None:
    center_r = body.center_row
    center_c = body.center_col
    frequency = 0.3 + density * 0.5
    phase = rng() * math.pi * 2  # one draw, even if no fill pixels exist

    for r in _body_rows(canvas, body):
        for c in range(canvas.shape[1]):
            if not _is_fill(canvas, r, c):
                continue
            dr = r - center_r
            dc = c - center_c
            angle = math.atan2(dr, dc) + phase
            dist = math.sqrt(dr * dr + dc * dc)
            if math.sin(angle * 3 + dist * frequency) > 0.3:
                canvas[r, c] = Slot.BODY_SECONDARY


_OVERLAYS: Dict[PatternType, Callable[[np.ndarray, Bounds, float, Rng], None]] = {
    PatternType.STRIPES: apply_stripes,
    PatternType.SPOTS: apply_spots,
    PatternType.GRADIENT: apply_gradient,
    PatternType.CHECKER: apply_checker,
    PatternType.SWIRL: apply_swirl,
}


def apply_pattern(canvas: np.ndarray, params: CreatureParams, body_bounds: Bounds,
                  rng: Rng) -> np.ndarray:
    """
    Apply the creature's pattern to a copy of `canvas`.

    Returns an unchanged copy for PatternType.NONE (or any unknown type)
    and for density <= 0; no draws are consumed in that case.
    """
    result = copy_canvas(canvas)
    overlay = _OVERLAYS.get(PatternType.coerce(params.pattern_type))
    if overlay is None or params.pattern_density <= 0:
        return result
    overlay(result, body_bounds, params.pattern_density, rng)
    return result
