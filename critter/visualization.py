"""
Sprite Visualization Tools

Simple matplotlib previews for debugging the renderer:
- A single sprite (palette applied, transparent background)
- An idle animation strip
- A growth sheet: one seed rendered across several progress values

Usage:
    from critter.visualization import plot_growth, save_growth_sheet

    plot_growth(seed, traits)
    save_growth_sheet("growth.png", seed, traits, progresses=(0.0, 0.5, 1.0))
"""

import logging
from typing import Optional, Sequence

import numpy as np

from .config import RenderConfig
from .palette import Palette
from .pipeline import CreatureSprite, render_creature
from .traits import DepthMetrics, StyleMetrics

# Conditional import for matplotlib (optional dependency)
try:
    import matplotlib.pyplot as plt
    HAS_MATPLOTLIB = True
except ImportError:
    HAS_MATPLOTLIB = False
    plt = None

logger = logging.getLogger(__name__)

DEFAULT_PROGRESSES = (0.0, 0.2, 0.4, 0.6, 0.8, 1.0)


def sprite_to_rgba(canvas: np.ndarray, palette: Palette) -> np.ndarray:
    """
    Convert a slot canvas to an (h, w, 4) uint8 image.

    Slot 0 is fully transparent; every other slot takes its palette color.
    """
    lut = np.zeros((len(palette), 4), dtype=np.uint8)
    for slot in range(1, len(palette)):
        lut[slot, :3] = palette.rgb(slot)
        lut[slot, 3] = 255
    return lut[np.asarray(canvas, dtype=np.intp)]


def _require_matplotlib() -> bool:
    if not HAS_MATPLOTLIB:
        logger.warning("matplotlib not available. Install with: pip install critter[viz]")
    return HAS_MATPLOTLIB


def _draw(ax, canvas: np.ndarray, palette: Palette, title: str = ""):
    ax.imshow(sprite_to_rgba(canvas, palette), interpolation='nearest')
    ax.set_xticks([])
    ax.set_yticks([])
    if title:
        ax.set_title(title, fontsize=9)


def plot_sprite(sprite: CreatureSprite, figsize: tuple = (4, 4), save_path: Optional[str] = None):
    """
    Plot the base frame of a rendered sprite.

    Args:
        sprite: Output of render_creature()
        figsize: Figure size (width, height)
        save_path: Optional path to save figure
    """
    if not _require_matplotlib():
        return None

    fig, ax = plt.subplots(figsize=figsize)
    _draw(ax, sprite.canvas, sprite.palette,
          f"stage {int(sprite.limb_stage)} / progress {sprite.progress:.2f}")
    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
        logger.info("Saved sprite to %s", save_path)

    return fig


def plot_frames(sprite: CreatureSprite, figsize: Optional[tuple] = None,
                save_path: Optional[str] = None):
    """Plot the base frame and every idle frame side by side."""
    if not _require_matplotlib():
        return None

    count = len(sprite.frames)
    fig, axes = plt.subplots(1, count, figsize=figsize or (2.5 * count, 3), squeeze=False)
    for i, (frame, action) in enumerate(zip(sprite.frames, sprite.actions)):
        label = "base" if i == 0 else (action.value if action is not None else "idle")
        _draw(axes[0, i], frame, sprite.palette, label)
    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
        logger.info("Saved frames to %s", save_path)

    return fig


def plot_growth(seed: str, traits, depth: Optional[DepthMetrics] = None,
                style: Optional[StyleMetrics] = None,
                progresses: Sequence[float] = DEFAULT_PROGRESSES,
                config: Optional[RenderConfig] = None, figsize: Optional[tuple] = None,
                save_path: Optional[str] = None):
    """
    Render one seed at several progress values and plot them in a row.

    Args:
        seed: Creature seed
        traits: TraitVector or mapping
        depth, style: Upstream metrics
        progresses: Progress values, left to right
        config: Render configuration
        figsize: Figure size (width, height)
        save_path: Optional path to save figure
    """
    if not _require_matplotlib():
        return None
    if not progresses:
        raise ValueError("progresses must not be empty")

    sprites = [render_creature(seed, traits, depth, style, p, config) for p in progresses]
    fig, axes = plt.subplots(1, len(sprites), figsize=figsize or (2.5 * len(sprites), 3),
                             squeeze=False)
    fig.suptitle(f"Growth of {seed[:12]}", fontsize=12, fontweight='bold')
    for ax, sprite in zip(axes[0], sprites):
        _draw(ax, sprite.canvas, sprite.palette,
              f"p={sprite.progress:.2f} s={int(sprite.limb_stage)}")
    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
        logger.info("Saved growth sheet to %s", save_path)

    return fig


def save_growth_sheet(path: str, seed: str, traits, depth: Optional[DepthMetrics] = None,
                      style: Optional[StyleMetrics] = None,
                      progresses: Sequence[float] = DEFAULT_PROGRESSES,
                      config: Optional[RenderConfig] = None):
    """Write a growth sheet image to `path` and close the figure."""
    fig = plot_growth(seed, traits, depth, style, progresses, config, save_path=path)
    if fig is not None:
        plt.close(fig)
    return fig
