"""
Palette Generator - 10-slot ANSI-256 color table

The palette continues the generator sequence straight after parameter
derivation (PALETTE_DRAWS values). Colors are ANSI-256 indices so a
terminal renderer can use them directly; to_hex() gives RGB for anything
else.

SLOTS:
    0 transparent marker    5 eye white (constant 231)
    1 outline               6 pupil (constant 16)
    2 body primary          7 mouth / complementary accent
    3 body secondary        8 triadic accent A (+120 deg)
    4 highlight             9 triadic accent B (+240 deg)
"""

import colorsys
import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List, Sequence, Tuple

import numpy as np

from .canvas import clamp, round_half_up
from .rng import Rng
from .traits import TraitVector, DepthMetrics, StyleMetrics, TRAIT_IDS


PALETTE_DRAWS = 3
PALETTE_SIZE = 10

EYE_WHITE_COLOR = 231
PUPIL_COLOR = 16


class Slot(IntEnum):
    """Fixed semantic role of each palette entry / canvas value."""
    TRANSPARENT = 0
    OUTLINE = 1
    BODY = 2
    BODY_SECONDARY = 3
    HIGHLIGHT = 4
    EYE_WHITE = 5
    PUPIL = 6
    MOUTH = 7
    ACCENT_A = 8
    ACCENT_B = 9


# Hue anchor per trait (degrees)
HUE_ANCHORS: Dict[str, float] = {
    'builder': 30,
    'fixer': 0,
    'refiner': 180,
    'scholar': 240,
    'scribe': 60,
    'architect': 270,
    'operator': 120,
    'guardian': 330,
}


# =============================================================================
# ANSI-256 COLOR SPACE
# =============================================================================

_CUBE_LEVELS = np.array([0, 95, 135, 175, 215, 255])

_SYSTEM_COLORS = [
    (0, 0, 0), (128, 0, 0), (0, 128, 0), (128, 128, 0),
    (0, 0, 128), (128, 0, 128), (0, 128, 128), (192, 192, 192),
    (128, 128, 128), (255, 0, 0), (0, 255, 0), (255, 255, 0),
    (0, 0, 255), (255, 0, 255), (0, 255, 255), (255, 255, 255),
]


def _build_search_table() -> Tuple[np.ndarray, np.ndarray]:
    """RGB rows for cube (16-231) then grayscale (232-255), plus their indices."""
    r, g, b = np.meshgrid(_CUBE_LEVELS, _CUBE_LEVELS, _CUBE_LEVELS, indexing='ij')
    cube = np.stack([r.ravel(), g.ravel(), b.ravel()], axis=1)
    grays = 8 + 10 * np.arange(24)
    gray = np.stack([grays, grays, grays], axis=1)
    table = np.concatenate([cube, gray]).astype(np.int64)
    indices = np.concatenate([16 + np.arange(216), 232 + np.arange(24)])
    return table, indices


_SEARCH_RGB, _SEARCH_INDEX = _build_search_table()


def hsl_to_rgb(h: float, s: float, l: float) -> Tuple[int, int, int]:
    """HSL (h 0-360, s/l 0-100) to 0-255 RGB."""
    r, g, b = colorsys.hls_to_rgb((h % 360) / 360.0, clamp(0, 100, l) / 100.0,
                                  clamp(0, 100, s) / 100.0)
    return (round_half_up(r * 255), round_half_up(g * 255), round_half_up(b * 255))


def rgb_to_ansi256(r: int, g: int, b: int) -> int:
    """Nearest ANSI-256 index by squared RGB distance (cube wins ties)."""
    diff = _SEARCH_RGB - np.array([r, g, b], dtype=np.int64)
    dist = np.einsum('ij,ij->i', diff, diff)
    return int(_SEARCH_INDEX[int(np.argmin(dist))])


def hsl_to_ansi256(h: float, s: float, l: float) -> int:
    return rgb_to_ansi256(*hsl_to_rgb(h, s, l))


def ansi256_to_rgb(index: int) -> Tuple[int, int, int]:
    """xterm RGB value for an ANSI-256 index."""
    if not 0 <= index <= 255:
        raise ValueError(f"ANSI-256 index out of range: {index}")
    if index < 16:
        return _SYSTEM_COLORS[index]
    if index >= 232:
        v = 8 + 10 * (index - 232)
        return (v, v, v)
    i = index - 16
    return (int(_CUBE_LEVELS[i // 36]), int(_CUBE_LEVELS[(i // 6) % 6]), int(_CUBE_LEVELS[i % 6]))


def circular_mean(angles: Sequence[float], weights: Sequence[float]) -> float:
    """Weighted circular mean of angles in degrees; 0 when all weights are 0."""
    sin_sum = 0.0
    cos_sum = 0.0
    w_total = 0.0
    for angle, w in zip(angles, weights):
        if w <= 0:
            continue
        rad = math.radians(angle)
        sin_sum += math.sin(rad) * w
        cos_sum += math.cos(rad) * w
        w_total += w
    if w_total == 0:
        return 0.0
    mean = math.degrees(math.atan2(sin_sum / w_total, cos_sum / w_total))
    return (mean + 360) % 360


# =============================================================================
# PALETTE
# =============================================================================

@dataclass(frozen=True)
class Palette:
    """Exactly 10 ANSI-256 indices, one per Slot."""
    colors: Tuple[int, ...]

    def __post_init__(self):
        colors = tuple(int(c) for c in self.colors)
        if len(colors) != PALETTE_SIZE:
            raise ValueError(f"Palette needs exactly {PALETTE_SIZE} colors, got {len(colors)}")
        bad = [c for c in colors if not 0 <= c <= 255]
        if bad:
            raise ValueError(f"Palette colors out of ANSI-256 range: {bad}")
        object.__setattr__(self, 'colors', colors)

    def __getitem__(self, slot: int) -> int:
        return self.colors[int(slot)]

    def __len__(self) -> int:
        return len(self.colors)

    def rgb(self, slot: int) -> Tuple[int, int, int]:
        return ansi256_to_rgb(self.colors[int(slot)])

    def to_hex(self) -> List[str]:
        """'#rrggbb' per slot, indices matching Slot."""
        return ['#%02x%02x%02x' % ansi256_to_rgb(c) for c in self.colors]


def generate_palette(traits, depth: DepthMetrics, style: StyleMetrics, rng: Rng) -> Palette:
    """
    Build the creature palette.

    Base hue is the trait-weighted circular mean of HUE_ANCHORS blended
    30/70 with a random hue. Saturation follows edit-test loop density,
    lightness follows message style. Consumes PALETTE_DRAWS values.
    """
    t = TraitVector.coerce(traits)
    angles = [HUE_ANCHORS[tid] for tid in TRAIT_IDS]
    weights = [t.score(tid) for tid in TRAIT_IDS]

    trait_hue = circular_mean(angles, weights)
    base_hue = (trait_hue * 0.3 + rng() * 360 * 0.7) % 360

    saturation = 40 + clamp(0, 40, depth.loop_density() * 30)
    lightness = clamp(30, 70, 35 + style.codeblock_ratio * 20 + style.bullet_ratio * 10)

    jitter_a = (rng() - 0.5) * 30
    jitter_b = (rng() - 0.5) * 30

    colors = [
        0,                                                                  # transparent
        hsl_to_ansi256(base_hue, saturation, max(10, lightness - 25)),      # outline
        hsl_to_ansi256(base_hue, saturation, lightness),                    # body
        hsl_to_ansi256(base_hue, saturation, min(80, lightness + 15)),      # body secondary
        hsl_to_ansi256(base_hue, saturation + 10, min(85, lightness + 25)), # highlight
        EYE_WHITE_COLOR,
        PUPIL_COLOR,
        hsl_to_ansi256((base_hue + 180) % 360, saturation, lightness),      # mouth
        hsl_to_ansi256((base_hue + 120 + jitter_a) % 360, saturation, lightness),
        hsl_to_ansi256((base_hue + 240 + jitter_b) % 360, saturation, lightness),
    ]
    return Palette(tuple(colors))
