"""
Creature Pipeline - seed + traits + progress -> finished sprite

STAGES (fixed order, one generator shared by all of them):
    1. Parameter Deriver      derive_creature_params    (21 draws)
    2. Progress gating        adjust_params_for_progress (0 draws)
    3. Palette Generator      generate_palette          (3 draws)
    4. Silhouette Modeler     generate_silhouette       (0 draws)
    5. Rasterizer             rasterize_silhouette      (0 draws)
    6. Feature Placer         place_features            (tail side)
    7. Pattern Overlay        apply_pattern             (spots / swirl)
    8. Item Placer            place_item_on_canvas      (stage 5 + usage mix)
    9. Animation Variator     generate_idle_frame       (per frame)

Reordering any stage changes the output for a seed. Steps 1-3 live in
derive_appearance(), the only routine that derives parameters and palette,
so every consumer that needs them (this pipeline, the render-data
exporter) replays the same draws.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

import numpy as np

from .animation import AnimationAction, generate_idle_frame
from .canvas import filled_count, freeze
from .config import RenderConfig
from .features import AnimationHints, place_features
from .growth import LimbStage, adjust_params_for_progress, compute_limb_stage
from .items import place_item_on_canvas
from .palette import Palette, generate_palette
from .params import CreatureParams, derive_creature_params
from .pattern import apply_pattern
from .rasterize import rasterize_silhouette
from .rng import Rng, create_rng
from .silhouette import Bounds, generate_silhouette
from .traits import DepthMetrics, StyleMetrics, TraitVector

logger = logging.getLogger(__name__)


# =============================================================================
# RESULTS
# =============================================================================

@dataclass(frozen=True)
class Appearance:
    """Gated parameters and palette for one seed/progress."""
    params: CreatureParams
    palette: Palette
    limb_stage: LimbStage


@dataclass(frozen=True)
class BodyResult:
    """Static sprite: everything except the animation frames."""
    canvas: np.ndarray
    hints: AnimationHints
    palette: Palette
    params: CreatureParams
    limb_stage: LimbStage
    head_bounds: Bounds
    body_bounds: Bounds


@dataclass(frozen=True)
class CreatureSprite:
    """
    Complete render output.

    frames[0] is the base canvas; the rest are idle frames. actions[i] is
    the action that produced frames[i] (None for the base frame and for
    idle ticks where nothing fired).
    """
    seed: str
    progress: float
    canvas: np.ndarray
    palette: Palette
    hints: AnimationHints
    params: CreatureParams
    limb_stage: LimbStage
    frames: Tuple[np.ndarray, ...]
    actions: Tuple[Optional[AnimationAction], ...]

    @property
    def width(self) -> int:
        return int(self.canvas.shape[1])

    @property
    def height(self) -> int:
        return int(self.canvas.shape[0])

    def filled_pixels(self) -> int:
        return filled_count(self.canvas)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly summary (canvases as nested lists)."""
        return {
            'seed': self.seed,
            'progress': self.progress,
            'limb_stage': int(self.limb_stage),
            'params': self.params.to_dict(),
            'palette': list(self.palette.colors),
            'canvas': self.canvas.tolist(),
            'hints': self.hints.to_dict(),
            'frames': [f.tolist() for f in self.frames],
            'actions': [a.value if a is not None else None for a in self.actions],
        }


# =============================================================================
# SHARED DERIVATION
# =============================================================================

def derive_appearance(traits, depth: DepthMetrics, style: StyleMetrics, progress: float,
                      rng: Rng) -> Appearance:
    """
    Derive gated parameters, then the palette, from one generator.

    This is the replay contract: a freshly seeded generator passed here
    yields the same parameters and palette as the full pipeline.
    """
    raw = derive_creature_params(traits, depth, style, rng)
    params = adjust_params_for_progress(raw, progress)
    palette = generate_palette(traits, depth, style, rng)
    return Appearance(params=params, palette=palette, limb_stage=compute_limb_stage(progress))


def generate_body(rng: Rng, progress: float, traits, depth: Optional[DepthMetrics] = None,
                  style: Optional[StyleMetrics] = None, canvas_width: int = 32,
                  text_height: int = 16, usage_mix: Optional[Mapping[str, float]] = None,
                  token_ratio: Optional[float] = None, hand_offset: int = 2) -> BodyResult:
    """
    Run stages 1-8 with an explicit generator.

    Args:
        rng: Generator owned by this call
        progress: Growth progress (0-1 by convention, not clamped here)
        traits: TraitVector or mapping
        depth, style: Upstream metrics (zeros when omitted)
        canvas_width, text_height: Canvas size; pixel height = 2 * text_height
        usage_mix: Enables the item at LimbStage.COMPLETE when not None
        token_ratio: Item richness input (1.0 when omitted)
        hand_offset: Item anchor distance from the body edge
    """
    traits = TraitVector.coerce(traits)
    depth = depth or DepthMetrics()
    style = style or StyleMetrics()
    pixel_h = text_height * 2

    look = derive_appearance(traits, depth, style, progress, rng)
    params = look.params

    silhouette = generate_silhouette(params, canvas_width, pixel_h, progress)
    canvas = rasterize_silhouette(silhouette.width_map, canvas_width, pixel_h)
    featured = place_features(canvas, params, silhouette.head_bounds, silhouette.body_bounds, rng)
    canvas = apply_pattern(featured.canvas, params, silhouette.body_bounds, rng)

    if look.limb_stage >= LimbStage.COMPLETE and usage_mix is not None:
        canvas = place_item_on_canvas(
            canvas,
            silhouette.body_bounds,
            traits,
            usage_mix,
            1.0 if token_ratio is None else token_ratio,
            rng,
            hand_offset=hand_offset,
        )

    logger.debug(
        "Body: progress=%.3f stage=%d pattern=%s filled=%d",
        progress, look.limb_stage, params.pattern_type.name, filled_count(canvas),
    )

    return BodyResult(
        canvas=freeze(canvas),
        hints=featured.hints,
        palette=look.palette,
        params=params,
        limb_stage=look.limb_stage,
        head_bounds=silhouette.head_bounds,
        body_bounds=silhouette.body_bounds,
    )


# =============================================================================
# PUBLIC ENTRY POINT
# =============================================================================

def render_creature(seed: str, traits, depth: Optional[DepthMetrics] = None,
                    style: Optional[StyleMetrics] = None, progress: float = 0.0,
                    config: Optional[RenderConfig] = None,
                    usage_mix: Optional[Mapping[str, float]] = None,
                    token_ratio: Optional[float] = None) -> CreatureSprite:
    """
    Render a creature and its idle frames.

    Same seed + same inputs always produce identical canvases, palette and
    frames. Pure computation: no I/O, nothing shared between calls.
    """
    config = (config or RenderConfig()).clamped()
    rng = create_rng(seed)

    body = generate_body(
        rng,
        progress,
        traits,
        depth,
        style,
        canvas_width=config.canvas_width,
        text_height=config.text_height,
        usage_mix=usage_mix,
        token_ratio=config.default_token_ratio if token_ratio is None else token_ratio,
        hand_offset=config.item_hand_offset,
    )

    frames = [body.canvas]
    actions: list = [None]
    for _ in range(config.idle_frames):
        frame, action = generate_idle_frame(
            body.canvas, body.hints, body.limb_stage, rng, config.action_probability,
        )
        frames.append(freeze(frame))
        actions.append(action)

    logger.debug("Rendered %s: %d frames, %d draws", seed[:12], len(frames),
                 rng.draws)

    return CreatureSprite(
        seed=seed,
        progress=progress,
        canvas=body.canvas,
        palette=body.palette,
        hints=body.hints,
        params=body.params,
        limb_stage=body.limb_stage,
        frames=tuple(frames),
        actions=tuple(actions),
    )
