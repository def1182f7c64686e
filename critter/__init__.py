# Critter - Deterministic Procedural Pixel Creatures
#
# A seed plus a trait vector grows into a small pixel-art creature.
# Same seed + same inputs = same sprite, on every machine.
#
# PIPELINE (one seeded generator, fixed stage order):
# ├── params.py       - Parameter Deriver (traits -> body proportions)
# ├── growth.py       - Progress gating + limb stages
# ├── palette.py      - ANSI-256 palette from traits
# ├── silhouette.py   - Per-row width map, head/body bounds
# ├── rasterize.py    - Width map -> outline + fill canvas
# ├── features.py     - Eyes, mouth, ears, horns, tail, wings, limbs
# ├── pattern.py      - Body surface patterns
# ├── items.py        - Held item at the final growth stage
# ├── animation.py    - Idle frames from animation hints
# └── pipeline.py     - render_creature()
#
# SUPPORT:
# rng.py (Mulberry32), traits.py (inputs), canvas.py (pixel grid helpers),
# config.py (RenderConfig), render_data.py (export), visualization.py

# =============================================================================
# PRIMARY EXPORTS: Pipeline
# =============================================================================

from .pipeline import (
    render_creature,  # Primary entry point
    generate_body,
    derive_appearance,
    CreatureSprite,
    BodyResult,
    Appearance,
)

from .config import (
    RenderConfig,
    create_config,
)

from .render_data import (
    RenderData,
    build_render_data,
)

# =============================================================================
# INPUTS
# =============================================================================

from .rng import (
    Mulberry32,
    create_rng,
    generate_seed,
    seed_to_state,
)

from .traits import (
    TraitId,
    TraitVector,
    DepthMetrics,
    StyleMetrics,
)

# =============================================================================
# STAGES
# =============================================================================

from .params import (
    CreatureParams,
    PatternType,
    derive_creature_params,
)

from .growth import (
    LimbStage,
    compute_limb_stage,
    adjust_params_for_progress,
)

from .palette import (
    Palette,
    Slot,
    generate_palette,
)

from .silhouette import (
    Bounds,
    WidthEntry,
    SilhouetteResult,
    generate_silhouette,
)

from .rasterize import rasterize_silhouette

from .features import (
    AnimationHints,
    FeaturesResult,
    place_features,
)

from .pattern import apply_pattern

from .items import (
    ItemFamily,
    ItemParams,
    ItemPixels,
    Richness,
    derive_item_params,
    generate_item_pixels,
    place_item_on_canvas,
)

from .animation import (
    AnimationAction,
    generate_idle_frame,
    generate_frames,
    unlocked_actions,
)

# Canvas helpers
from .canvas import (
    new_canvas,
    canvas_to_lines,
    round_half_up,
)

# Visualization: Matplotlib previews (plots return None without matplotlib)
from .visualization import (
    HAS_MATPLOTLIB,
    sprite_to_rgba,
    plot_sprite,
    plot_frames,
    plot_growth,
    save_growth_sheet,
)

__version__ = "0.1.0"
