"""
Procedural Items - a held object for fully grown creatures

Only creatures at LimbStage.COMPLETE carry an item, and only when a usage
mix is supplied. The family comes from traits + randomness; the richness
tier comes from the token ratio (never random):

    token_ratio < 0.5   modest    plain shape
    token_ratio <= 1.0  standard  + accent-A decoration on the shape
    otherwise           lavish    + accent-B sparkle around the shape

DRAW ORDER:
derive_item_params() consumes ITEM_PARAM_DRAWS values; the shape routines
consume none; the richness pass consumes one draw per candidate pixel.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

import numpy as np

from .canvas import copy_canvas, freeze, round_half_up
from .palette import Slot
from .rng import Rng
from .silhouette import Bounds
from .traits import TraitVector

logger = logging.getLogger(__name__)


ITEM_PARAM_DRAWS = 6


class ItemFamily(Enum):
    """Item shape family."""
    BLADE = "blade"
    STAFF = "staff"
    SHIELD = "shield"
    TOOL = "tool"
    ORB = "orb"

    @classmethod
    def coerce(cls, value: Any) -> 'ItemFamily':
        """Unknown families fall back to BLADE."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.BLADE


FAMILIES: Tuple[ItemFamily, ...] = tuple(ItemFamily)


class Richness(Enum):
    """Decoration intensity tier."""
    MODEST = "modest"
    STANDARD = "standard"
    LAVISH = "lavish"


@dataclass(frozen=True)
class ItemParams:
    family: ItemFamily
    length: int             # 2-6
    width: int              # 1-4
    taper: float            # 0-1
    curvature: float        # 0-1
    cross_piece: bool
    richness: Richness
    dominant_category: str  # highest-share usage category


@dataclass(frozen=True)
class ItemPixels:
    """Standalone item sprite plus the pixel that sits in the creature's hand."""
    pixels: np.ndarray
    anchor_row: int
    anchor_col: int


# =============================================================================
# PARAMETERS
# =============================================================================

def compute_richness(token_ratio: float) -> Richness:
    if token_ratio < 0.5:
        return Richness.MODEST
    if token_ratio <= 1.0:
        return Richness.STANDARD
    return Richness.LAVISH


def dominant_category(usage_mix: Optional[Mapping[str, float]]) -> str:
    """Key with the largest positive share; "impl" when none."""
    best = 0.0
    category = "impl"
    for key, value in (usage_mix or {}).items():
        if value > best:
            best = value
            category = key
    return category


def derive_item_params(traits, usage_mix: Optional[Mapping[str, float]],
                       token_ratio: float, rng: Rng) -> ItemParams:
    """Family, proportions and richness for the creature's item."""
    trait_sum = TraitVector.coerce(traits).total() / 800.0

    family_idx = int((trait_sum * 0.3 + rng() * 0.7) * len(FAMILIES))
    family = FAMILIES[min(max(family_idx, 0), len(FAMILIES) - 1)]

    length = round_half_up((rng() * 0.7 + trait_sum * 0.3) * 4 + 2)
    width = round_half_up((rng() * 0.7 + trait_sum * 0.3) * 3 + 1)
    taper = rng()
    curvature = rng()
    cross_piece = rng() > 0.5

    return ItemParams(
        family=family,
        length=min(6, max(2, length)),
        width=min(4, max(1, width)),
        taper=taper,
        curvature=curvature,
        cross_piece=cross_piece,
        richness=compute_richness(token_ratio),
        dominant_category=dominant_category(usage_mix),
    )


# =============================================================================
# SHAPES
# =============================================================================

def _grid(h: int, w: int) -> np.ndarray:
    return np.zeros((h, w), dtype=np.int8)


def apply_richness(grid: np.ndarray, richness: Richness, rng: Rng) -> np.ndarray:
    """Decorate a copy of an item grid according to its richness tier."""
    result = copy_canvas(grid)
    if richness == Richness.MODEST:
        return result

    h, w = result.shape
    for r in range(h):
        for c in range(w):
            if result[r, c] != 0 and rng() < 0.15:
                result[r, c] = Slot.ACCENT_A

    if richness == Richness.LAVISH:
        for r in range(h):
            for c in range(w):
                if result[r, c] != 0 or rng() >= 0.1:
                    continue
                touching = (
                    (r > 0 and result[r - 1, c] != 0)
                    or (r < h - 1 and result[r + 1, c] != 0)
                    or (c > 0 and result[r, c - 1] != 0)
                    or (c < w - 1 and result[r, c + 1] != 0)
                )
                if touching:
                    result[r, c] = Slot.ACCENT_B
    return result


def _blade(params: ItemParams) -> Tuple[np.ndarray, int, int]:
    """Tapered blade, tip on top, handle at the bottom, optional guard."""
    h = params.length + 2
    w = params.width
    grid = _grid(h, w)

    for r in range(h):
        along = r / (h - 1)  # 0 = tip, 1 = handle
        row_w = max(1, round_half_up(w * (1 - params.taper * (1 - along))))
        offset = (w - row_w) // 2
        grid[r, offset:offset + row_w] = Slot.MOUTH if r < 2 else Slot.BODY

    handle = grid[h - 1]
    handle[handle != 0] = Slot.BODY_SECONDARY

    if params.cross_piece and h > 3:
        guard_w = w + 1
        guarded = _grid(h, guard_w)
        shift = (guard_w - w) // 2
        guarded[:, shift:shift + w] = grid
        guarded[h - 2, :] = Slot.BODY_SECONDARY
        return guarded, h - 1, guard_w // 2

    return grid, h - 1, w // 2


def _staff(params: ItemParams) -> Tuple[np.ndarray, int, int]:
    """Uniform shaft with a gem tip."""
    h = params.length + 3
    w = max(1, min(2, params.width))
    grid = _grid(h, w)
    grid[:, :] = Slot.BODY
    grid[0, :] = Slot.MOUTH
    return grid, h - 1, w // 2


def _shield(params: ItemParams) -> Tuple[np.ndarray, int, int]:
    """Rounded rectangle with an outline border and a center emblem."""
    h = params.length
    w = params.width + 2
    grid = _grid(h, w)

    for r in range(h):
        shrink = 1 if r in (0, h - 1) else 0
        grid[r, shrink:w - shrink] = Slot.BODY

    filled = grid != 0
    for r in range(h):
        for c in range(w):
            if not filled[r, c]:
                continue
            border = (
                r in (0, h - 1) or c in (0, w - 1)
                or not filled[r - 1, c] or not filled[r, c - 1]
            )
            if border:
                grid[r, c] = Slot.OUTLINE

    grid[h // 2, w // 2] = Slot.MOUTH
    return grid, h // 2, 0


def _tool(params: ItemParams) -> Tuple[np.ndarray, int, int]:
    """Two-row head on top of a 1px shaft."""
    shaft_h = params.length + 1
    head_w = max(2, params.width + 1)
    head_h = 2
    total_h = shaft_h + head_h
    grid = _grid(total_h, head_w)
    grid[:head_h, :] = Slot.MOUTH
    shaft_col = head_w // 2
    grid[head_h:, shaft_col] = Slot.BODY
    return grid, total_h - 1, shaft_col


def _orb(params: ItemParams) -> Tuple[np.ndarray, int, int]:
    """Diamond (manhattan-distance) orb with a highlight at the center."""
    size = max(2, min(params.length, params.width))
    mid = size // 2
    grid = _grid(size, size)
    for r in range(size):
        for c in range(size):
            dist = abs(r - mid) + abs(c - mid)
            if dist <= mid:
                grid[r, c] = Slot.MOUTH if dist == mid else Slot.BODY
    grid[mid, mid] = Slot.HIGHLIGHT
    return grid, mid, 0


_SHAPES: Dict[ItemFamily, Callable[[ItemParams], Tuple[np.ndarray, int, int]]] = {
    ItemFamily.BLADE: _blade,
    ItemFamily.STAFF: _staff,
    ItemFamily.SHIELD: _shield,
    ItemFamily.TOOL: _tool,
    ItemFamily.ORB: _orb,
}


def generate_item_pixels(params: ItemParams, rng: Rng) -> ItemPixels:
    """Shape the item for its family, then decorate it by richness."""
    shape = _SHAPES.get(ItemFamily.coerce(params.family), _blade)
    grid, anchor_row, anchor_col = shape(params)
    pixels = freeze(apply_richness(grid, params.richness, rng))
    return ItemPixels(pixels=pixels, anchor_row=anchor_row, anchor_col=anchor_col)


# =============================================================================
# PLACEMENT
# =============================================================================

def blit_item(canvas: np.ndarray, item: ItemPixels, hand_row: int, hand_col: int) -> np.ndarray:
    """
    Copy item pixels onto a copy of `canvas` with the anchor at the hand.

    Only transparent destination pixels are written; anything already on
    the canvas wins.
    """
    result = copy_canvas(canvas)
    h, w = result.shape
    start_row = hand_row - item.anchor_row
    start_col = hand_col - item.anchor_col
    rows, cols = np.nonzero(item.pixels)
    for r, c in zip(rows, cols):
        tr = start_row + int(r)
        tc = start_col + int(c)
        if 0 <= tr < h and 0 <= tc < w and result[tr, tc] == 0:
            result[tr, tc] = item.pixels[r, c]
    return result


def place_item_on_canvas(canvas: np.ndarray, body_bounds: Bounds, traits,
                         usage_mix: Optional[Mapping[str, float]], token_ratio: float,
                         rng: Rng, hand_offset: int = 2) -> np.ndarray:
    """
    Derive, shape and place an item beside the body's right side.

    Args:
        canvas: Finished creature canvas (not modified)
        body_bounds: Body bounding box
        traits: TraitVector or mapping
        usage_mix: {category: share}
        token_ratio: Drives the richness tier
        rng: Shared generator
        hand_offset: Columns between the body edge and the hand anchor
    """
    params = derive_item_params(traits, usage_mix, token_ratio, rng)
    item = generate_item_pixels(params, rng)
    hand_row = body_bounds.top + round_half_up(body_bounds.height * 0.5)
    hand_col = body_bounds.right + hand_offset
    logger.debug("Item %s (%s) at row=%d col=%d", params.family.value,
                 params.richness.value, hand_row, hand_col)
    return blit_item(canvas, item, hand_row, hand_col)
