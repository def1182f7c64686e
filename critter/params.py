"""
Creature Parameters - Body plan derived from traits + randomness

Every continuous parameter is 30% trait-influenced and 70% random:

    blend(influence, rng, lo, hi) = (influence * 0.3 + rng() * 0.7) * (hi - lo) + lo

Boolean features compare the raw mix against a fixed threshold instead.

DRAW ORDER:
derive_creature_params() consumes exactly PARAM_DRAWS values, always in the
order the fields are computed below. Anything that must reproduce the same
parameters for a seed (see pipeline.derive_appearance) depends on this.
"""

from dataclasses import dataclass, asdict, fields, replace
from enum import IntEnum
from typing import Any, Dict, Mapping

from .rng import Rng
from .traits import TraitVector, DepthMetrics, StyleMetrics


PARAM_DRAWS = 21


# =============================================================================
# PATTERN TYPE
# =============================================================================

class PatternType(IntEnum):
    """Body-fill overlay, mutually exclusive."""
    NONE = 0
    STRIPES = 1
    SPOTS = 2
    GRADIENT = 3
    CHECKER = 4
    SWIRL = 5

    @classmethod
    def coerce(cls, value: Any) -> 'PatternType':
        """Unknown values fall back to NONE."""
        try:
            return cls(int(value))
        except (TypeError, ValueError):
            return cls.NONE


# =============================================================================
# CREATURE PARAMETERS
# =============================================================================

@dataclass(frozen=True)
class CreatureParams:
    """
    Flat body-plan record for one render.

    Created by derive_creature_params(), then narrowed by
    growth.adjust_params_for_progress(). Never edited field-by-field
    afterwards - re-derive and re-gate instead.
    """
    # Proportions
    head_ratio: float = 0.3         # 0.20-0.45 share of height given to head
    body_width_ratio: float = 0.5   # 0.30-0.80 share of canvas width
    roundness: float = 0.5          # 0 = boxy, 1 = elliptical
    top_heavy: float = 0.3          # 0-1, narrows the bottom of the body

    # Face
    eye_size: int = 1               # 1-3
    eye_spacing: float = 0.5        # 0.3-0.7

    # Appendage flags
    has_ears: bool = False
    has_horns: bool = False
    has_tail: bool = False
    has_wings: bool = False

    # Pattern
    pattern_type: PatternType = PatternType.NONE
    pattern_density: float = 0.0    # 0-1

    # Shape details
    neck_width: float = 0.5         # 0.3-0.8
    leg_length: float = 0.2         # 0.1-0.3
    arm_length: float = 0.2         # 0.1-0.3
    tail_length: float = 0.2        # 0.1-0.4
    wing_size: float = 0.2          # 0.1-0.4
    ear_size: float = 0.2           # 0.1-0.3
    horn_size: float = 0.2          # 0.1-0.3
    body_taper: float = 0.3         # 0-1, how much body narrows at bottom
    asymmetry: float = 0.05         # 0-0.2, slight left/right shift

    # Growth (set by progress gating)
    limb_stage: int = 0             # 0-5

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-friendly dictionary."""
        d = asdict(self)
        d['pattern_type'] = int(self.pattern_type)
        return d

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> 'CreatureParams':
        """Deserialize; unknown keys are ignored, missing keys use defaults."""
        known = {f.name for f in fields(cls)}
        kwargs = {k: v for k, v in d.items() if k in known}
        if 'pattern_type' in kwargs:
            kwargs['pattern_type'] = PatternType.coerce(kwargs['pattern_type'])
        return cls(**kwargs)

    def with_changes(self, **changes) -> 'CreatureParams':
        return replace(self, **changes)


# =============================================================================
# DERIVATION
# =============================================================================

def blend(influence: float, rng: Rng, lo: float, hi: float) -> float:
    """Mix a 0-1 trait influence with one draw and scale into [lo, hi]."""
    mixed = influence * 0.3 + rng() * 0.7
    return mixed * (hi - lo) + lo


def feature_check(influence: float, rng: Rng, threshold: float) -> bool:
    """Boolean feature: raw mix must exceed the threshold."""
    return influence * 0.3 + rng() * 0.7 > threshold


def derive_creature_params(traits, depth: DepthMetrics, style: StyleMetrics,
                           rng: Rng) -> CreatureParams:
    """
    Derive raw (ungated) creature parameters.

    Args:
        traits: TraitVector or {trait_id: score} mapping
        depth: Session depth metrics
        style: Message style metrics
        rng: Generator; exactly PARAM_DRAWS values are consumed

    Returns:
        CreatureParams with limb_stage 0
    """
    t = TraitVector.coerce(traits)
    n = t.normalized

    head_ratio = blend(n("scholar", "scribe"), rng, 0.20, 0.45)
    body_width_ratio = blend(n("builder", "guardian"), rng, 0.30, 0.80)
    roundness = blend(n("refiner", "operator"), rng, 0.0, 1.0)
    top_heavy = blend(n("architect"), rng, 0.0, 1.0)
    eye_size = int(rng() * 3) + 1
    eye_spacing = blend(0.5, rng, 0.3, 0.7)

    has_ears = feature_check(n("guardian", "fixer"), rng, 0.45)
    has_horns = feature_check(n("guardian", "builder"), rng, 0.70)
    has_tail = feature_check(n("operator", "fixer"), rng, 0.40)
    has_wings = feature_check(n("scribe", "architect"), rng, 0.80)

    # Pattern type from how structured the user's writing is
    pattern_raw = int((style.complexity() * 0.3 + rng() * 0.7) * 6)
    pattern_type = PatternType(min(5, max(0, pattern_raw)))

    # Pattern density from edit-test loop depth
    pattern_density = blend(depth.normalized_loops(), rng, 0.0, 1.0)

    neck_width = blend(n("refiner", "builder"), rng, 0.3, 0.8)
    leg_length = blend(n("operator"), rng, 0.1, 0.3)
    arm_length = blend(n("builder"), rng, 0.1, 0.3)
    tail_length = blend(n("operator"), rng, 0.1, 0.4)
    wing_size = blend(n("architect"), rng, 0.1, 0.4)
    ear_size = blend(n("guardian"), rng, 0.1, 0.3)
    horn_size = blend(n("guardian"), rng, 0.1, 0.3)
    body_taper = blend(n("refiner"), rng, 0.0, 1.0)
    asymmetry = blend(n("fixer"), rng, 0.0, 0.2)

    return CreatureParams(
        head_ratio=head_ratio,
        body_width_ratio=body_width_ratio,
        roundness=roundness,
        top_heavy=top_heavy,
        eye_size=min(3, eye_size),
        eye_spacing=eye_spacing,
        has_ears=has_ears,
        has_horns=has_horns,
        has_tail=has_tail,
        has_wings=has_wings,
        pattern_type=pattern_type,
        pattern_density=pattern_density,
        neck_width=neck_width,
        leg_length=leg_length,
        arm_length=arm_length,
        tail_length=tail_length,
        wing_size=wing_size,
        ear_size=ear_size,
        horn_size=horn_size,
        body_taper=body_taper,
        asymmetry=asymmetry,
    )
