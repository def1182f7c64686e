"""
Feature Placer - face, appendages and limbs

Burns eyes, mouth, ears, horns, tail, wings, arms and legs into a copy of
the rasterized silhouette. What is drawn depends on the gated flags and
the limb stage:

    feature   flag        min stage
    ears      has_ears    2
    tail      has_tail    2
    horns     has_horns   3
    wings     has_wings   4
    arms/legs -           1 (sticks), 2 (jointed), 3 (hands and shoes)

Every pixel placed is recorded in the animation hints so the Animation
Variator can move or recolor it later without rescanning the sprite.

DRAW ORDER:
Only the tail consumes a draw (its side), and only when it is placed.
"""

import math
from dataclasses import dataclass
from typing import Dict, List, Tuple

import numpy as np

from .canvas import Point, copy_canvas, in_bounds, points_with_values, round_half_up
from .palette import Slot
from .params import CreatureParams
from .rng import Rng
from .silhouette import Bounds, leg_length


# =============================================================================
# ANIMATION HINTS
# =============================================================================

@dataclass(frozen=True)
class AnimationHints:
    """Pixel positions the idle animations are allowed to touch."""
    eye_positions: Tuple[Point, ...] = ()       # eye whites + pupils
    gesture_pixels: Tuple[Point, ...] = ()      # appendages and limbs
    shimmer_pixels: Tuple[Point, ...] = ()      # every non-eye visible pixel

    def all_positions(self) -> set:
        return set(self.eye_positions) | set(self.gesture_pixels) | set(self.shimmer_pixels)

    def to_dict(self) -> Dict[str, List[List[int]]]:
        return {
            'eye_positions': [list(p) for p in self.eye_positions],
            'gesture_pixels': [list(p) for p in self.gesture_pixels],
            'shimmer_pixels': [list(p) for p in self.shimmer_pixels],
        }


@dataclass(frozen=True)
class FeaturesResult:
    canvas: np.ndarray
    hints: AnimationHints


class _Painter:
    """Bounds-checked drawing onto one canvas, collecting hint positions."""

    def __init__(self, canvas: np.ndarray):
        self.canvas = canvas
        self.eyes: Dict[Point, None] = {}
        self.gestures: Dict[Point, None] = {}

    def put(self, row: int, col: int, value: int, hints: Dict[Point, None] = None) -> None:
        if not in_bounds(self.canvas, row, col):
            return
        self.canvas[row, col] = value
        if hints is not None:
            hints[(row, col)] = None

    def gesture(self, row: int, col: int, value: int) -> None:
        self.put(row, col, value, self.gestures)


# =============================================================================
# FACE
# =============================================================================

def _place_eyes(p: _Painter, params: CreatureParams, head: Bounds) -> int:
    eye_row = head.center_row
    offset = max(1, round_half_up(head.width * params.eye_spacing * 0.5))
    center = head.center_col

    for col in (center - offset, center + offset):
        if params.eye_size <= 1:
            p.put(eye_row, col, Slot.PUPIL, p.eyes)
        elif params.eye_size == 2:
            # 2x2: whites on top and right, pupil bottom-left
            p.put(eye_row - 1, col, Slot.EYE_WHITE, p.eyes)
            p.put(eye_row - 1, col + 1, Slot.EYE_WHITE, p.eyes)
            p.put(eye_row, col, Slot.PUPIL, p.eyes)
            p.put(eye_row, col + 1, Slot.EYE_WHITE, p.eyes)
        else:
            # 3x2: whites around a centered pupil
            for dc in (-1, 0, 1):
                p.put(eye_row - 1, col + dc, Slot.EYE_WHITE, p.eyes)
            p.put(eye_row, col - 1, Slot.EYE_WHITE, p.eyes)
            p.put(eye_row, col, Slot.PUPIL, p.eyes)
            p.put(eye_row, col + 1, Slot.EYE_WHITE, p.eyes)
    return eye_row


def _place_mouth(p: _Painter, head: Bounds, eye_row: int) -> None:
    row = min(head.bottom - 1, eye_row + max(2, round_half_up(head.height * 0.3)))
    width = max(2, round_half_up(head.width * 0.2))
    start = head.center_col - width // 2
    for col in range(start, start + width):
        p.put(row, col, Slot.MOUTH)


# =============================================================================
# APPENDAGES
# =============================================================================

def _place_ears(p: _Painter, params: CreatureParams, head: Bounds) -> None:
    """Outline triangles rising from the head's top corners."""
    ear_h = max(2, round_half_up(head.height * params.ear_size))
    for i in range(ear_h):
        row = head.top - ear_h + i
        p.gesture(row, head.left + i, Slot.OUTLINE)
        p.gesture(row, head.right - i, Slot.OUTLINE)
        if i > 0:
            p.gesture(row, head.left + i + 1, Slot.BODY)
            p.gesture(row, head.right - i - 1, Slot.BODY)


def _place_horns(p: _Painter, params: CreatureParams, head: Bounds) -> None:
    """Accent spikes, thick at the base and leaning outward at the tip."""
    horn_h = max(2, round_half_up(head.height * params.horn_size * 1.5))
    base_l = head.left + round_half_up(head.width * 0.2)
    base_r = head.right - round_half_up(head.width * 0.2)
    for i in range(horn_h):
        row = head.top - horn_h + i
        lean = (horn_h - 1 - i) // 2
        p.gesture(row, base_l - lean, Slot.ACCENT_A)
        p.gesture(row, base_r + lean, Slot.ACCENT_A)
        if i == horn_h - 1:
            p.gesture(row, base_l + 1, Slot.ACCENT_A)
            p.gesture(row, base_r - 1, Slot.ACCENT_A)


def _place_tail(p: _Painter, params: CreatureParams, head: Bounds, body: Bounds,
                rng: Rng) -> None:
    """Sinusoidal tail off one side of the body; one draw picks the side."""
    tail_len = max(2, round_half_up(head.width * params.tail_length * 2))
    tail_row = body.center_row
    direction = 1 if rng() > 0.5 else -1
    start = body.right + 1 if direction > 0 else body.left - 1
    for i in range(tail_len):
        row = tail_row + round_half_up(math.sin(i * 0.8) * 1.5)
        p.gesture(row, start + direction * i, Slot.ACCENT_B)


def _place_wings(p: _Painter, params: CreatureParams, head: Bounds, body: Bounds) -> None:
    """Triangular fans from the shoulders, highlight on the leading edges."""
    wing_h = max(2, round_half_up(body.height * params.wing_size))
    wing_w = max(2, round_half_up(head.width * params.wing_size * 1.5))
    for r in range(wing_h):
        width = max(1, round_half_up(wing_w * (1 - r / wing_h)))
        row = body.top + r
        for c in range(width):
            value = Slot.HIGHLIGHT if r == 0 or c == width - 1 else Slot.ACCENT_A
            p.gesture(row, body.left - 1 - c, value)
            p.gesture(row, body.right + 1 + c, value)


# =============================================================================
# LIMBS
# =============================================================================

def _place_arms(p: _Painter, params: CreatureParams, body: Bounds) -> None:
    stage = params.limb_stage
    arm_len = max(1, round_half_up(body.height * params.arm_length))
    arm_row = body.top + round_half_up(body.height * 0.25)
    elbow_row = arm_row + arm_len // 2

    for side in (-1, 1):
        inner = body.left - 1 if side < 0 else body.right + 1
        outer = inner + side
        for row in range(arm_row, arm_row + arm_len):
            p.gesture(row, inner, Slot.BODY)
            if stage >= 2:
                value = Slot.BODY_SECONDARY if row == elbow_row else Slot.BODY
                p.gesture(row, outer, value)
        if stage >= 3:
            # Hand block below the arm end
            for row in (arm_row + arm_len, arm_row + arm_len + 1):
                p.gesture(row, inner, Slot.BODY_SECONDARY)
                p.gesture(row, outer, Slot.BODY_SECONDARY)


def _place_legs(p: _Painter, params: CreatureParams, body: Bounds) -> None:
    stage = params.limb_stage
    length = leg_length(body.height, params.leg_length)
    spacing = max(1, round_half_up(body.width * 0.25))
    center = body.center_col

    for side in (-1, 1):
        col = center + side * spacing
        if stage == 1:
            for i in range(1, length + 1):
                p.gesture(body.bottom + i, col, Slot.BODY)
            continue

        # Upper leg, knee, lower leg; two pixels wide growing outward
        half = max(1, length // 2)
        outer = col + side
        knee_row = body.bottom + half + 1
        end_row = body.bottom + 2 * half + 1
        for row in range(body.bottom + 1, end_row + 1):
            p.gesture(row, col, Slot.BODY)
            p.gesture(row, outer, Slot.BODY_SECONDARY if row == knee_row else Slot.BODY)

        if stage >= 3:
            # Shoes: two rows, toe sticking outward
            for row in (end_row + 1, end_row + 2):
                for c in (col, outer, outer + side):
                    p.gesture(row, c, Slot.OUTLINE)


# =============================================================================
# ENTRY POINT
# =============================================================================

def place_features(canvas: np.ndarray, params: CreatureParams, head_bounds: Bounds,
                   body_bounds: Bounds, rng: Rng) -> FeaturesResult:
    """
    Place face, appendages and limbs on a copy of `canvas`.

    Returns:
        FeaturesResult with the new canvas and the three hint lists
    """
    p = _Painter(copy_canvas(canvas))
    stage = params.limb_stage

    eye_row = _place_eyes(p, params, head_bounds)
    _place_mouth(p, head_bounds, eye_row)

    if params.has_ears and stage >= 2:
        _place_ears(p, params, head_bounds)
    if params.has_horns and stage >= 3:
        _place_horns(p, params, head_bounds)
    if params.has_tail and stage >= 2:
        _place_tail(p, params, head_bounds, body_bounds, rng)
    if params.has_wings and stage >= 4:
        _place_wings(p, params, head_bounds, body_bounds)

    if stage >= 1:
        _place_arms(p, params, body_bounds)
        _place_legs(p, params, body_bounds)

    shimmer = points_with_values(p.canvas, excluded=(Slot.TRANSPARENT, Slot.EYE_WHITE, Slot.PUPIL))

    hints = AnimationHints(
        eye_positions=tuple(p.eyes),
        gesture_pixels=tuple(p.gestures),
        shimmer_pixels=tuple(shimmer),
    )
    return FeaturesResult(canvas=p.canvas, hints=hints)
