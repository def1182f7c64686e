"""
Silhouette Modeler - per-row width profile of head + body

The creature is a stacked head ellipse and body ellipse, each blended
toward a rectangle by (1 - roundness). Body rows also taper and skew
top-heavy along their height. The whole shape is bottom-anchored on the
canvas, leaving room underneath for legs at the current limb stage.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .canvas import clamp, round_half_up
from .params import CreatureParams


@dataclass(frozen=True)
class WidthEntry:
    """Left/right extent of the silhouette on one row (inclusive)."""
    left: int
    right: int


@dataclass(frozen=True)
class Bounds:
    """Inclusive bounding box."""
    top: int
    bottom: int
    left: int
    right: int

    @property
    def height(self) -> int:
        return self.bottom - self.top

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def center_row(self) -> int:
        return round_half_up((self.top + self.bottom) / 2)

    @property
    def center_col(self) -> int:
        return round_half_up((self.left + self.right) / 2)


WidthMap = Tuple[Optional[WidthEntry], ...]


@dataclass(frozen=True)
class SilhouetteResult:
    width_map: WidthMap
    head_bounds: Bounds
    body_bounds: Bounds


def ellipse_half_width(dy: float, ry: float, max_half_w: float, roundness: float) -> int:
    """Half-width at vertical offset dy, blended ellipse (1.0) <-> rectangle (0.0)."""
    if ry <= 0 or max_half_w <= 0:
        return 0
    ratio = min(abs(dy), ry) / ry
    ellipse_half = max_half_w * math.sqrt(1 - ratio * ratio)
    return round_half_up(ellipse_half * roundness + max_half_w * (1 - roundness))


def leg_length(body_span: int, leg_ratio: float) -> int:
    """Leg length in rows for a body spanning `body_span` rows (bottom - top)."""
    return max(1, round_half_up(body_span * leg_ratio))


def compute_leg_reserve(params: CreatureParams, total_h: int) -> int:
    """Rows reserved below the body for legs, knees and shoes."""
    if params.limb_stage <= 0:
        return 0
    head_h = max(2, round_half_up(total_h * params.head_ratio))
    body_h = max(2, total_h - head_h)
    length = leg_length(body_h - 1, params.leg_length)
    if params.limb_stage == 1:
        return length
    half = max(1, length // 2)
    reserve = half + 1 + half  # upper + knee + lower
    if params.limb_stage >= 3:
        reserve += 2  # shoes
    return reserve


def _scan_bounds(entries: List[Optional[WidthEntry]], top: int, bottom: int,
                 canvas_w: int) -> Bounds:
    left = canvas_w
    right = 0
    for r in range(max(0, top), min(len(entries) - 1, bottom) + 1):
        e = entries[r]
        if e is not None:
            left = min(left, e.left)
            right = max(right, e.right)
    return Bounds(top=top, bottom=bottom, left=left, right=right)


def generate_silhouette(params: CreatureParams, canvas_w: int, pixel_h: int,
                        progress: float) -> SilhouetteResult:
    """
    Build the width map and head/body bounds.

    Args:
        params: Gated creature parameters
        canvas_w: Canvas width in pixels
        pixel_h: Canvas height in pixels (2x the text height)
        progress: Growth progress; scale runs 0.15 (birth) -> 1.0 (complete)
    """
    scale = 0.15 + 0.85 * clamp(0.0, 1.0, progress)

    total_h = max(4, round_half_up(pixel_h * 0.7 * scale))
    total_h = min(total_h, max(4, pixel_h))
    # Shrink to leave the leg reserve on-canvas; a shorter body never needs more
    total_h = max(4, min(total_h, pixel_h - compute_leg_reserve(params, total_h)))
    head_h = max(2, round_half_up(total_h * params.head_ratio))
    body_h = max(2, total_h - head_h)

    # Bottom-align above the leg reserve, never pushing the top off-canvas
    leg_reserve = compute_leg_reserve(params, total_h)
    creature_bottom = max(total_h - 1, pixel_h - 1 - leg_reserve)
    creature_top = creature_bottom - total_h + 1

    head_top = creature_top
    head_bottom = head_top + head_h - 1
    body_top = head_bottom + 1
    body_bottom = creature_bottom

    center_x = canvas_w // 2

    head_max_half = max(1, round_half_up(canvas_w * params.body_width_ratio * 0.6 * scale / 2))
    head_ry = max(1, head_h // 2)
    body_max_half = max(1, round_half_up(canvas_w * params.body_width_ratio * scale / 2))
    body_ry = max(1, body_h // 2)
    neck_half = max(1, round_half_up(min(head_max_half, body_max_half) * params.neck_width))

    entries: List[Optional[WidthEntry]] = [None] * pixel_h

    def put_row(r: int, half_w: int) -> None:
        if not 0 <= r < pixel_h or half_w <= 0:
            return
        shift = round_half_up(params.asymmetry * half_w)
        entries[r] = WidthEntry(
            left=max(0, center_x - half_w + shift),
            right=min(canvas_w - 1, center_x + half_w + shift),
        )

    # Head
    head_center = head_top + head_ry
    for r in range(head_top, head_bottom + 1):
        put_row(r, ellipse_half_width(r - head_center, head_ry, head_max_half, params.roundness))

    # Body
    body_center = body_top + body_ry
    for r in range(body_top, body_bottom + 1):
        frac = (r - body_top) / max(1, body_h - 1)  # 0 at top, 1 at bottom
        taper = 1 - params.body_taper * frac * 0.5
        heavy = 1 - params.top_heavy * frac * 0.3
        row_max = max(1, round_half_up(body_max_half * taper * heavy))
        put_row(r, ellipse_half_width(r - body_center, body_ry, row_max, params.roundness))

    # Neck: soften the head/body junction rows toward the neck width
    for r in (head_bottom, body_top):
        if not 0 <= r < pixel_h or entries[r] is None:
            continue
        current = round_half_up((entries[r].right - entries[r].left) / 2)
        put_row(r, round_half_up((current + neck_half) / 2))

    return SilhouetteResult(
        width_map=tuple(entries),
        head_bounds=_scan_bounds(entries, head_top, head_bottom, canvas_w),
        body_bounds=_scan_bounds(entries, body_top, body_bottom, canvas_w),
    )
