"""
Tests for idle animation actions.

Every action returns a fresh frame; the base frame is never modified and
only hinted cells (plus the one-cell destination of a shifted pixel) may
differ from it.
"""

import numpy as np
import pytest

from conftest import SequenceRng
from critter.animation import (
    AnimationAction, apply_action, apply_blink, apply_foot_tap, apply_gesture, apply_shimmer,
    generate_frames, generate_idle_frame, unlocked_actions,
)
from critter.canvas import freeze, new_canvas
from critter.features import AnimationHints, place_features
from critter.palette import Slot
from critter.params import CreatureParams
from critter.rasterize import rasterize_silhouette
from critter.rng import create_rng
from critter.silhouette import generate_silhouette


@pytest.fixture
def grown():
    """Frozen base frame and hints for a fully grown creature."""
    params = CreatureParams(limb_stage=5, eye_size=2, has_ears=True, has_tail=True,
                            has_wings=True, arm_length=0.3, leg_length=0.3)
    sil = generate_silhouette(params, 32, 32, 1.0)
    canvas = rasterize_silhouette(sil.width_map, 32, 32)
    result = place_features(canvas, params, sil.head_bounds, sil.body_bounds, SequenceRng(0.9))
    return freeze(result.canvas), result.hints


def allowed_cells(hints):
    cells = set(hints.all_positions())
    for r, c in hints.gesture_pixels:
        cells.update({(r - 1, c), (r + 1, c), (r, c - 1), (r, c + 1)})
    return cells


def changed_cells(base, frame):
    rows, cols = np.nonzero(base != frame)
    return {(int(r), int(c)) for r, c in zip(rows, cols)}


class TestActionPool:

    def test_pool_grows_with_stage(self):
        base = [AnimationAction.BLINK, AnimationAction.GESTURE, AnimationAction.SHIMMER]
        assert unlocked_actions(0) == base
        assert unlocked_actions(1) == base
        assert unlocked_actions(2) == base + [AnimationAction.ARM_SWAY]
        assert unlocked_actions(4) == base + [AnimationAction.ARM_SWAY, AnimationAction.FOOT_TAP]
        assert unlocked_actions(5)[-1] == AnimationAction.FLOURISH
        assert len(unlocked_actions(5)) == 6


class TestActions:

    def test_blink_closes_eyes(self, grown):
        base, hints = grown
        frame = apply_blink(base, hints)
        for r, c in hints.eye_positions:
            assert frame[r, c] == Slot.OUTLINE
        assert changed_cells(base, frame) <= set(hints.eye_positions)

    @pytest.mark.parametrize("action", list(AnimationAction))
    def test_containment(self, grown, action):
        base, hints = grown
        allowed = allowed_cells(hints)
        for i in range(25):
            frame = apply_action(action, base, hints, create_rng(f"{action.value}-{i}"))
            assert frame.shape == base.shape
            assert changed_cells(base, frame) <= allowed

    @pytest.mark.parametrize("action", list(AnimationAction))
    def test_base_untouched(self, grown, action):
        base, hints = grown
        before = base.copy()
        frame = apply_action(action, base, hints, create_rng("untouched"))
        assert np.array_equal(base, before)
        assert frame.flags.writeable

    def test_shimmer_uses_highlight(self, grown):
        base, hints = grown
        frame = apply_shimmer(base, hints, SequenceRng(0.0))
        changed = changed_cells(base, frame)
        assert changed <= set(hints.shimmer_pixels)
        assert all(frame[r, c] == Slot.HIGHLIGHT for r, c in changed)

    def test_foot_tap_moves_up(self):
        base = new_canvas(5, 5)
        base[3, 2] = Slot.BODY
        hints = AnimationHints(gesture_pixels=((3, 2),))
        frame = apply_foot_tap(base, hints, SequenceRng(0.0))
        assert frame[2, 2] == Slot.BODY
        assert frame[3, 2] == 0

    def test_shift_needs_transparent_target(self):
        base = new_canvas(5, 5)
        base[2, 1:4] = Slot.BODY
        hints = AnimationHints(gesture_pixels=((2, 2),))
        # Direction draw 0.9 -> right, into an occupied cell
        frame = apply_gesture(base, hints, SequenceRng(0.9, 0.0))
        assert np.array_equal(frame, base)


class TestEmptyHints:
    """Empty hint lists leave the frame unchanged and draw nothing."""

    @pytest.mark.parametrize("action", list(AnimationAction))
    def test_unchanged(self, action):
        base = new_canvas(6, 6)
        base[2:4, 2:4] = Slot.BODY
        rng = SequenceRng(0.3)
        frame = apply_action(action, base, AnimationHints(), rng)
        assert np.array_equal(frame, base)
        assert rng.draws == 0


class TestIdleFrames:

    def test_no_action_branch_equals_base(self, grown):
        base, hints = grown
        rng = SequenceRng(0.99)
        frame, action = generate_idle_frame(base, hints, 5, rng)
        assert action is None
        assert np.array_equal(frame, base)
        assert rng.draws == 1

    def test_fired_action_comes_from_pool(self, grown):
        base, hints = grown
        frame, action = generate_idle_frame(base, hints, 0, SequenceRng(0.0))
        assert action == AnimationAction.BLINK
        assert np.array_equal(frame, apply_blink(base, hints))

    def test_pool_respects_stage(self, grown):
        base, hints = grown
        # 0.99 of the pool lands on its last entry
        _, early = generate_idle_frame(base, hints, 0, SequenceRng(0.1, 0.99), probability=0.5)
        _, late = generate_idle_frame(base, hints, 5, SequenceRng(0.1, 0.99), probability=0.5)
        assert early == AnimationAction.SHIMMER
        assert late == AnimationAction.FLOURISH

    def test_idle_containment(self, grown):
        base, hints = grown
        allowed = allowed_cells(hints)
        rng = create_rng("idle")
        for _ in range(60):
            frame, _ = generate_idle_frame(base, hints, 5, rng, probability=1.0)
            assert changed_cells(base, frame) <= allowed

    def test_fixed_cycle(self, grown):
        base, hints = grown
        frames = generate_frames(base, hints, create_rng("cycle"))
        assert len(frames) == 4
        assert np.array_equal(frames[0], base)
        assert np.array_equal(frames[1], apply_blink(base, hints))
        assert all(not f.flags.writeable for f in frames)
