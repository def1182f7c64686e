"""Tests for palette generation and the ANSI-256 helpers."""

import pytest

from critter.palette import (
    EYE_WHITE_COLOR, PALETTE_DRAWS, PUPIL_COLOR, Palette, Slot,
    ansi256_to_rgb, circular_mean, generate_palette, hsl_to_ansi256, hsl_to_rgb, rgb_to_ansi256,
)
from critter.rng import create_rng
from critter.traits import DepthMetrics, StyleMetrics, TraitVector


class TestColorSpace:

    def test_hsl_primary_red(self):
        assert hsl_to_rgb(0, 100, 50) == (255, 0, 0)
        assert hsl_to_ansi256(0, 100, 50) == 196

    def test_hue_wraps(self):
        assert hsl_to_rgb(360, 100, 50) == hsl_to_rgb(0, 100, 50)

    def test_extremes_map_to_cube_corners(self):
        assert rgb_to_ansi256(0, 0, 0) == 16
        assert rgb_to_ansi256(255, 255, 255) == 231

    def test_mid_gray_prefers_grayscale_ramp(self):
        # 128 is far from every cube level pair but exact on the ramp
        assert rgb_to_ansi256(128, 128, 128) == 244

    def test_ansi_to_rgb(self):
        assert ansi256_to_rgb(EYE_WHITE_COLOR) == (255, 255, 255)
        assert ansi256_to_rgb(PUPIL_COLOR) == (0, 0, 0)
        assert ansi256_to_rgb(232) == (8, 8, 8)
        assert ansi256_to_rgb(9) == (255, 0, 0)
        with pytest.raises(ValueError):
            ansi256_to_rgb(256)

    def test_circular_mean(self):
        wrapped = circular_mean([350, 10], [1, 1])
        assert min(wrapped, 360 - wrapped) == pytest.approx(0.0, abs=1e-6)
        assert circular_mean([90, 180], [1, 0]) == pytest.approx(90.0)
        assert circular_mean([90], [0]) == 0.0


class TestPalette:

    def test_requires_exactly_ten_colors(self):
        with pytest.raises(ValueError):
            Palette((0, 1, 2))
        with pytest.raises(ValueError):
            Palette(tuple(range(11)))

    def test_rejects_out_of_range_colors(self):
        with pytest.raises(ValueError):
            Palette((0, 1, 2, 3, 4, 5, 6, 7, 8, 300))

    def test_indexing_by_slot(self):
        p = Palette((0, 1, 2, 3, 4, 231, 16, 7, 8, 9))
        assert p[Slot.EYE_WHITE] == 231
        assert len(p) == 10
        assert p.to_hex()[Slot.PUPIL] == '#000000'
        assert p.rgb(Slot.EYE_WHITE) == (255, 255, 255)


class TestGeneratePalette:

    def test_consumes_three_draws(self, traits, depth, style):
        rng = create_rng("palette")
        generate_palette(traits, depth, style, rng)
        assert rng.draws == PALETTE_DRAWS == 3

    def test_constant_slots(self, depth, style):
        for i in range(100):
            t = TraitVector(builder=i, scholar=100 - i)
            p = generate_palette(t, depth, style, create_rng(f"pal-{i}"))
            assert len(p) == 10
            assert p[Slot.TRANSPARENT] == 0
            assert p[Slot.EYE_WHITE] == EYE_WHITE_COLOR
            assert p[Slot.PUPIL] == PUPIL_COLOR
            assert all(0 <= c <= 255 for c in p.colors)

    def test_deterministic(self, traits, depth, style):
        a = generate_palette(traits, depth, style, create_rng("same"))
        b = generate_palette(traits, depth, style, create_rng("same"))
        assert a == b

    def test_zero_inputs(self):
        p = generate_palette(TraitVector(), DepthMetrics(), StyleMetrics(), create_rng("zero"))
        assert p[Slot.TRANSPARENT] == 0
