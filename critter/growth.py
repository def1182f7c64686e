"""
Growth gating - progress decides which features a creature may show.

Growth is re-derivation, not mutation: a larger progress value re-gates the
same raw parameters into a richer variant.
"""

from dataclasses import replace
from enum import IntEnum

from .params import CreatureParams


class LimbStage(IntEnum):
    """Structural complexity stage, from progress breakpoints."""
    BLOB = 0            # No limbs
    STICKS = 1          # 1px arms and legs
    JOINTED = 2         # 2px limbs with elbow/knee highlight
    HANDS_FEET = 3      # Hands and shoes
    WINGED = 4          # Wings unlocked
    COMPLETE = 5        # Full growth, may carry an item


# (upper bound, stage) - first bound the progress is below wins
_STAGE_BREAKPOINTS = (
    (0.1, LimbStage.BLOB),
    (0.3, LimbStage.STICKS),
    (0.5, LimbStage.JOINTED),
    (0.7, LimbStage.HANDS_FEET),
    (1.0, LimbStage.WINGED),
)


def compute_limb_stage(progress: float) -> LimbStage:
    for bound, stage in _STAGE_BREAKPOINTS:
        if progress < bound:
            return stage
    return LimbStage.COMPLETE


def adjust_params_for_progress(params: CreatureParams, progress: float) -> CreatureParams:
    """
    Gate appendages and pattern density by growth progress.

    Below 0.1 everything optional is off and density is 0. Each later tier
    re-enables more appendages (ears/tail, then horns, then wings) and
    scales density by the progress value itself.
    """
    stage = int(compute_limb_stage(progress))

    if progress < 0.1:
        return replace(
            params,
            has_ears=False,
            has_tail=False,
            has_horns=False,
            has_wings=False,
            pattern_density=0.0,
            limb_stage=stage,
        )

    density = params.pattern_density * progress

    if progress < 0.3:
        return replace(
            params,
            has_ears=False,
            has_tail=False,
            has_horns=False,
            has_wings=False,
            pattern_density=density,
            limb_stage=stage,
        )

    if progress < 0.5:
        return replace(
            params,
            has_horns=False,
            has_wings=False,
            pattern_density=density,
            limb_stage=stage,
        )

    if progress < 0.7:
        return replace(params, has_wings=False, pattern_density=density, limb_stage=stage)

    return replace(params, pattern_density=density, limb_stage=stage)
