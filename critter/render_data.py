"""
Render-data export for external renderers (3D viewer, web previews).

Consumers that draw the creature themselves need the exact parameters and
palette the sprite pipeline used. build_render_data() gets them through
pipeline.derive_appearance() on a freshly seeded generator, so both paths
consume the same draws in the same order.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .params import CreatureParams
from .pipeline import derive_appearance
from .rng import create_rng
from .traits import DepthMetrics, StyleMetrics, TraitVector


@dataclass(frozen=True)
class RenderData:
    creature_params: CreatureParams
    palette: List[str]          # '#rrggbb' per palette slot
    progress: float
    pet_id: str
    seed: str
    archetype: str
    subtype: str
    stage: int
    traits: Dict[str, float]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'creature_params': self.creature_params.to_dict(),
            'palette': list(self.palette),
            'progress': self.progress,
            'pet_id': self.pet_id,
            'seed': self.seed,
            'archetype': self.archetype,
            'subtype': self.subtype,
            'stage': self.stage,
            'traits': dict(self.traits),
        }

    def to_json(self, indent: Optional[int] = None) -> str:
        return json.dumps(self.to_dict(), indent=indent)


def build_render_data(seed: str, traits, depth: Optional[DepthMetrics] = None,
                      style: Optional[StyleMetrics] = None, progress: float = 0.0,
                      pet_id: str = "") -> RenderData:
    """Parameters, hex palette and identity for one creature at `progress`."""
    traits = TraitVector.coerce(traits)
    look = derive_appearance(traits, depth or DepthMetrics(), style or StyleMetrics(),
                             progress, create_rng(seed))
    return RenderData(
        creature_params=look.params,
        palette=look.palette.to_hex(),
        progress=progress,
        pet_id=pet_id,
        seed=seed,
        archetype=traits.archetype(),
        subtype=traits.subtype(),
        stage=int(look.limb_stage),
        traits=traits.as_dict(),
    )
