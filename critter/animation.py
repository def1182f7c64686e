"""
Animation Variator - idle frames from a finished sprite

Each action works on a fresh copy of the base frame and only touches
pixels listed in the animation hints (a shifted pixel lands one cell
away from its hinted position, and only on a transparent cell).

ACTION POOL (grows with limb stage):
    BLINK, GESTURE, SHIMMER   always
    ARM_SWAY                  stage >= 2
    FOOT_TAP                  stage >= 3
    FLOURISH                  stage >= 5 (arm-sway motion, item in hand)
"""

from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np

from .canvas import Point, copy_canvas, freeze, in_bounds
from .features import AnimationHints
from .palette import Slot
from .rng import Rng


DEFAULT_ACTION_PROBABILITY = 0.35


class AnimationAction(Enum):
    BLINK = "blink"
    GESTURE = "gesture"
    SHIMMER = "shimmer"
    ARM_SWAY = "arm_sway"
    FOOT_TAP = "foot_tap"
    FLOURISH = "flourish"


# (action, minimum limb stage)
_UNLOCKS: Tuple[Tuple[AnimationAction, int], ...] = (
    (AnimationAction.BLINK, 0),
    (AnimationAction.GESTURE, 0),
    (AnimationAction.SHIMMER, 0),
    (AnimationAction.ARM_SWAY, 2),
    (AnimationAction.FOOT_TAP, 3),
    (AnimationAction.FLOURISH, 5),
)


def unlocked_actions(limb_stage: int) -> List[AnimationAction]:
    """Actions available at a limb stage, in fixed pool order."""
    return [action for action, stage in _UNLOCKS if limb_stage >= stage]


# =============================================================================
# ACTIONS
# =============================================================================

def _pick_count(rng: Rng) -> int:
    return min(3, int(rng() * 3) + 1)


def _pick(candidates: Sequence[Point], rng: Rng) -> Point:
    return candidates[min(len(candidates) - 1, int(rng() * len(candidates)))]


def _shift_pixels(base: np.ndarray, candidates: Sequence[Point], rng: Rng,
                  delta: Tuple[int, int]) -> np.ndarray:
    """Move 1-3 hinted pixels by `delta` into transparent cells."""
    frame = copy_canvas(base)
    if not candidates:
        return frame
    count = _pick_count(rng)
    for _ in range(count):
        row, col = _pick(candidates, rng)
        if not in_bounds(frame, row, col):
            continue
        new_row, new_col = row + delta[0], col + delta[1]
        if in_bounds(frame, new_row, new_col) and frame[new_row, new_col] == 0:
            frame[new_row, new_col] = frame[row, col]
            frame[row, col] = 0
    return frame


def apply_blink(base: np.ndarray, hints: AnimationHints) -> np.ndarray:
    """Close the eyes: hinted eye pixels become outline."""
    frame = copy_canvas(base)
    for row, col in hints.eye_positions:
        if in_bounds(frame, row, col) and frame[row, col] in (Slot.EYE_WHITE, Slot.PUPIL):
            frame[row, col] = Slot.OUTLINE
    return frame


def apply_gesture(base: np.ndarray, hints: AnimationHints, rng: Rng) -> np.ndarray:
    """Nudge 1-3 appendage pixels sideways; direction drawn once per call."""
    if not hints.gesture_pixels:
        return copy_canvas(base)
    direction = 1 if rng() > 0.5 else -1
    return _shift_pixels(base, hints.gesture_pixels, rng, (0, direction))


def apply_arm_sway(base: np.ndarray, hints: AnimationHints, rng: Rng) -> np.ndarray:
    """Swing 1-3 limb pixels up or down; direction drawn once per call."""
    if not hints.gesture_pixels:
        return copy_canvas(base)
    direction = 1 if rng() > 0.5 else -1
    return _shift_pixels(base, hints.gesture_pixels, rng, (direction, 0))


def apply_foot_tap(base: np.ndarray, hints: AnimationHints, rng: Rng) -> np.ndarray:
    """Lift 1-3 limb pixels by one row."""
    return _shift_pixels(base, hints.gesture_pixels, rng, (-1, 0))


def apply_shimmer(base: np.ndarray, hints: AnimationHints, rng: Rng) -> np.ndarray:
    """Flash 1-3 visible non-eye pixels to the highlight color."""
    frame = copy_canvas(base)
    candidates = hints.shimmer_pixels
    if not candidates:
        return frame
    for _ in range(_pick_count(rng)):
        row, col = _pick(candidates, rng)
        if in_bounds(frame, row, col):
            frame[row, col] = Slot.HIGHLIGHT
    return frame


_ACTIONS: Dict[AnimationAction, Callable[[np.ndarray, AnimationHints, Rng], np.ndarray]] = {
    AnimationAction.BLINK: lambda base, hints, rng: apply_blink(base, hints),
    AnimationAction.GESTURE: apply_gesture,
    AnimationAction.SHIMMER: apply_shimmer,
    AnimationAction.ARM_SWAY: apply_arm_sway,
    AnimationAction.FOOT_TAP: apply_foot_tap,
    AnimationAction.FLOURISH: apply_arm_sway,
}


def apply_action(action: AnimationAction, base: np.ndarray, hints: AnimationHints,
                 rng: Rng) -> np.ndarray:
    return _ACTIONS[action](base, hints, rng)


# =============================================================================
# FRAME GENERATION
# =============================================================================

def generate_idle_frame(base: np.ndarray, hints: AnimationHints, limb_stage: int,
                        rng: Rng, probability: float = DEFAULT_ACTION_PROBABILITY
                        ) -> Tuple[np.ndarray, Optional[AnimationAction]]:
    """
    One idle tick.

    The first draw decides whether any action fires; when it does not, the
    frame is an exact copy of `base` and the action is None. Otherwise a
    second draw picks from unlocked_actions(limb_stage).

    Returns:
        (frame, action or None)
    """
    if rng() >= probability:
        return copy_canvas(base), None
    pool = unlocked_actions(limb_stage)
    action = pool[min(len(pool) - 1, int(rng() * len(pool)))]
    return apply_action(action, base, hints, rng), action


def generate_frames(base: np.ndarray, hints: AnimationHints, rng: Rng) -> List[np.ndarray]:
    """Fixed idle cycle: [base, blink, gesture, shimmer], all frozen."""
    frames = [
        copy_canvas(base),
        apply_blink(base, hints),
        apply_gesture(base, hints, rng),
        apply_shimmer(base, hints, rng),
    ]
    return [freeze(f) for f in frames]
