"""
Tests for item generation and placement.
"""

import numpy as np
import pytest

from conftest import SequenceRng
from critter.canvas import filled_count, new_canvas
from critter.items import (
    ITEM_PARAM_DRAWS, FAMILIES, ItemFamily, ItemParams, ItemPixels, Richness,
    apply_richness, blit_item, compute_richness, derive_item_params, dominant_category,
    generate_item_pixels, place_item_on_canvas,
)
from critter.palette import Slot
from critter.rng import create_rng
from critter.silhouette import Bounds
from critter.traits import TraitVector


def item_params(family, length=4, width=3, richness=Richness.MODEST, cross_piece=False):
    return ItemParams(family=family, length=length, width=width, taper=0.5, curvature=0.5,
                      cross_piece=cross_piece, richness=richness, dominant_category="impl")


class TestItemParams:

    @pytest.mark.parametrize("ratio,tier", [
        (0.0, Richness.MODEST), (0.49, Richness.MODEST),
        (0.5, Richness.STANDARD), (1.0, Richness.STANDARD),
        (1.01, Richness.LAVISH), (5.0, Richness.LAVISH),
    ])
    def test_richness_tiers(self, ratio, tier):
        assert compute_richness(ratio) == tier

    def test_dominant_category(self):
        assert dominant_category({"impl": 0.2, "debug": 0.5, "docs": 0.3}) == "debug"
        assert dominant_category({}) == "impl"
        assert dominant_category(None) == "impl"
        assert dominant_category({"docs": 0.0}) == "impl"

    def test_consumes_six_draws(self, traits):
        rng = create_rng("item")
        derive_item_params(traits, {"impl": 1.0}, 1.0, rng)
        assert rng.draws == ITEM_PARAM_DRAWS == 6

    def test_ranges(self, traits):
        for i in range(200):
            p = derive_item_params(traits, {"impl": 1.0}, 0.8, create_rng(f"item-{i}"))
            assert p.family in FAMILIES
            assert 2 <= p.length <= 6
            assert 1 <= p.width <= 4
            assert p.richness == Richness.STANDARD

    def test_zero_draws_make_a_plain_blade(self):
        p = derive_item_params(TraitVector(), None, 0.2, SequenceRng(0.0))
        assert p.family == ItemFamily.BLADE
        assert (p.length, p.width) == (2, 1)
        assert not p.cross_piece
        assert p.dominant_category == "impl"

    def test_unknown_family_falls_back_to_blade(self):
        assert ItemFamily.coerce("trident") == ItemFamily.BLADE
        assert ItemFamily.coerce("ORB") == ItemFamily.ORB


class TestShapes:

    def test_plain_blade(self):
        p = derive_item_params(TraitVector(), None, 0.2, SequenceRng(0.0))
        item = generate_item_pixels(p, SequenceRng(0.0))
        assert item.pixels.tolist() == [[7], [7], [2], [3]]
        assert (item.anchor_row, item.anchor_col) == (3, 0)
        assert not item.pixels.flags.writeable

    def test_guarded_blade(self):
        item = generate_item_pixels(item_params(ItemFamily.BLADE, cross_piece=True),
                                    SequenceRng(0.5))
        h, w = item.pixels.shape
        assert w == 4
        assert np.all(item.pixels[h - 2] == Slot.BODY_SECONDARY)

    def test_staff_has_gem_tip(self):
        item = generate_item_pixels(item_params(ItemFamily.STAFF), SequenceRng(0.5))
        assert item.pixels.shape == (7, 2)
        assert np.all(item.pixels[0] == Slot.MOUTH)
        assert np.all(item.pixels[1:] == Slot.BODY)

    def test_shield_border_and_emblem(self):
        item = generate_item_pixels(item_params(ItemFamily.SHIELD, length=5, width=3),
                                    SequenceRng(0.5))
        px = item.pixels
        assert px.shape == (5, 5)
        assert px[2, 2] == Slot.MOUTH
        assert px[0, 0] == 0 and px[4, 4] == 0
        assert px[2, 0] == Slot.OUTLINE and px[2, 4] == Slot.OUTLINE
        assert (item.anchor_row, item.anchor_col) == (2, 0)

    def test_tool_head_on_shaft(self):
        item = generate_item_pixels(item_params(ItemFamily.TOOL, length=3, width=2),
                                    SequenceRng(0.5))
        px = item.pixels
        assert px.shape == (6, 3)
        assert np.all(px[:2] == Slot.MOUTH)
        assert np.all(px[2:, 1] == Slot.BODY)
        assert np.all(px[2:, 0] == 0)

    def test_orb_diamond(self):
        item = generate_item_pixels(item_params(ItemFamily.ORB, length=5, width=5),
                                    SequenceRng(0.5))
        px = item.pixels
        assert px[2, 2] == Slot.HIGHLIGHT
        assert px[0, 2] == Slot.MOUTH
        assert px[0, 0] == 0

    def test_richness_decorates(self):
        grid = np.full((4, 4), Slot.BODY, dtype=np.int8)
        grid[0, :] = 0
        assert np.array_equal(apply_richness(grid, Richness.MODEST, SequenceRng(0.0)), grid)
        standard = apply_richness(grid, Richness.STANDARD, SequenceRng(0.0))
        assert np.all(standard[1:] == Slot.ACCENT_A)
        assert np.all(standard[0] == 0)
        lavish = apply_richness(grid, Richness.LAVISH, SequenceRng(0.0))
        assert np.all(lavish[0] == Slot.ACCENT_B)


class TestPlacement:

    BODY = Bounds(top=10, bottom=20, left=8, right=20)

    def test_never_overwrites(self):
        canvas = np.ones((32, 32), dtype=np.int8)
        item = ItemPixels(pixels=np.full((3, 3), 7, dtype=np.int8), anchor_row=1, anchor_col=1)
        assert np.array_equal(blit_item(canvas, item, 5, 5), canvas)

    def test_clips_at_canvas_edge(self):
        canvas = new_canvas(4, 4)
        item = ItemPixels(pixels=np.full((3, 3), 7, dtype=np.int8), anchor_row=1, anchor_col=1)
        result = blit_item(canvas, item, 0, 3)
        assert filled_count(result) == 4

    def test_placed_at_hand(self):
        canvas = new_canvas(32, 32)
        result = place_item_on_canvas(canvas, self.BODY, TraitVector(), None, 0.2,
                                      SequenceRng(0.0))
        # Plain blade with its handle at (top + round(h/2), right + 2)
        assert result[15, 22] == Slot.BODY_SECONDARY
        assert list(result[12:16, 22]) == [7, 7, 2, 3]
        assert filled_count(result) == 4
        assert filled_count(canvas) == 0

    def test_preserves_existing_pixels(self, traits):
        rng = create_rng("keep")
        canvas = new_canvas(32, 32)
        canvas[5:25, 18:28] = Slot.OUTLINE
        result = place_item_on_canvas(canvas, self.BODY, traits, {"impl": 1.0}, 2.0, rng)
        assert np.all(result[canvas != 0] == canvas[canvas != 0])
