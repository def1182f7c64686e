"""
Render configuration

All tunables of the renderer in one dataclass. Use create_config(size,
**overrides) for presets; RenderConfig.clamped() raises degenerate canvas
sizes to the minimum viable size before anything is modeled.
"""

import logging
from dataclasses import dataclass, asdict, fields, replace
from typing import Any, Dict, Mapping

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderConfig:
    """
    Configuration for one creature render.

    The canvas is canvas_width x (2 * text_height) pixels: two pixel rows
    per text row, as drawn by a half-block terminal renderer.
    """
    # ==========================================================================
    # CANVAS
    # ==========================================================================
    canvas_width: int = 32
    text_height: int = 16
    min_canvas_width: int = 16
    min_text_height: int = 8

    # ==========================================================================
    # ANIMATION
    # ==========================================================================
    idle_frames: int = 3                # action frames after the base frame
    action_probability: float = 0.35    # chance an idle tick does anything

    # ==========================================================================
    # ITEMS (final growth stage)
    # ==========================================================================
    item_hand_offset: int = 2           # columns right of the body edge
    default_token_ratio: float = 1.0

    @property
    def pixel_height(self) -> int:
        return self.text_height * 2

    def clamped(self) -> 'RenderConfig':
        """Copy with canvas dimensions raised to the minimum viable size."""
        width = max(self.min_canvas_width, int(self.canvas_width))
        height = max(self.min_text_height, int(self.text_height))
        if width != self.canvas_width or height != self.text_height:
            logger.warning(
                "Canvas %sx%s below minimum, clamped to %sx%s",
                self.canvas_width, self.text_height, width, height,
            )
            return replace(self, canvas_width=width, text_height=height)
        return self

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> 'RenderConfig':
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in d.items() if k in known})


PRESETS: Dict[str, Dict[str, Any]] = {
    "small": {"canvas_width": 24, "text_height": 12},
    "medium": {},
    "large": {"canvas_width": 48, "text_height": 24},
}


def create_config(size: str = "medium", **overrides) -> RenderConfig:
    """
    Factory for a RenderConfig.

    Args:
        size: "small", "medium" or "large"
        **overrides: Any RenderConfig field

    Raises:
        ValueError: unknown size or unknown override name
    """
    if size not in PRESETS:
        raise ValueError(f"Unknown config size: {size!r} (expected one of {sorted(PRESETS)})")
    known = {f.name for f in fields(RenderConfig)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise ValueError(f"Unknown config options: {', '.join(unknown)}")
    values = dict(PRESETS[size])
    values.update(overrides)
    return RenderConfig(**values)
