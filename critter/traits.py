"""
Traits & Metrics - Behavioral inputs that shape a creature

The renderer is driven by three upstream inputs:
1. TraitVector  - 8 behavioral scores (0-100), always fully populated
2. DepthMetrics - session / edit-test loop counters
3. StyleMetrics - textual style ratios of the user's messages

All three are read-only. Missing trait entries read as 0 at exactly one
boundary (TraitVector.from_mapping) so the blending formulas never have to
guess about absent keys.
"""

import logging
from dataclasses import dataclass, fields, asdict
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)


# =============================================================================
# TRAIT IDS
# =============================================================================

class TraitId(Enum):
    """The 8 behavioral traits, in canonical order."""
    BUILDER = "builder"         # Ships new code
    FIXER = "fixer"             # Debugs and repairs
    REFINER = "refiner"         # Refactors and polishes
    SCHOLAR = "scholar"         # Researches and reads
    SCRIBE = "scribe"           # Writes docs and prose
    ARCHITECT = "architect"     # Plans and designs
    OPERATOR = "operator"       # Runs ops and tooling
    GUARDIAN = "guardian"       # Tests and secures


TRAIT_IDS: Tuple[str, ...] = tuple(t.value for t in TraitId)


def _as_score(value: Any) -> float:
    """Coerce a raw trait value to a float score; junk reads as 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


# =============================================================================
# TRAIT VECTOR
# =============================================================================

@dataclass(frozen=True)
class TraitVector:
    """
    Fixed-size record of the 8 trait scores.

    Scores are conventionally 0-100. Every field always exists; build from a
    loose mapping with from_mapping().
    """
    builder: float = 0.0
    fixer: float = 0.0
    refiner: float = 0.0
    scholar: float = 0.0
    scribe: float = 0.0
    architect: float = 0.0
    operator: float = 0.0
    guardian: float = 0.0

    @classmethod
    def from_mapping(cls, mapping: Optional[Mapping[str, Any]] = None) -> 'TraitVector':
        """
        Build a vector from a {trait_id: score} mapping.

        Missing, None or non-numeric entries read as 0. Unknown keys are
        ignored with a warning.
        """
        mapping = mapping or {}
        unknown = sorted(str(k) for k in mapping if k not in TRAIT_IDS)
        if unknown:
            logger.warning("Ignoring unknown trait ids: %s", ", ".join(unknown))
        return cls(**{tid: _as_score(mapping.get(tid)) for tid in TRAIT_IDS})

    @classmethod
    def coerce(cls, traits: Any) -> 'TraitVector':
        """Accept either a TraitVector or a plain mapping."""
        if isinstance(traits, cls):
            return traits
        return cls.from_mapping(traits)

    def score(self, trait: Any) -> float:
        """Score for a TraitId or trait id string."""
        key = trait.value if isinstance(trait, TraitId) else str(trait)
        if key not in TRAIT_IDS:
            return 0.0
        return getattr(self, key)

    def normalized(self, *trait_ids: str) -> float:
        """Mean of the given scores mapped to 0-1 (sum / (100 * n))."""
        if not trait_ids:
            return 0.0
        return sum(self.score(t) for t in trait_ids) / (100.0 * len(trait_ids))

    def total(self) -> float:
        return sum(getattr(self, tid) for tid in TRAIT_IDS)

    def values(self) -> List[float]:
        """Scores in canonical order."""
        return [getattr(self, tid) for tid in TRAIT_IDS]

    def as_dict(self) -> Dict[str, float]:
        return {tid: getattr(self, tid) for tid in TRAIT_IDS}

    def ranked(self) -> List[str]:
        """Trait ids from highest to lowest score (stable on ties)."""
        return sorted(TRAIT_IDS, key=lambda tid: -getattr(self, tid))

    def archetype(self) -> str:
        """Highest-scoring trait id."""
        return self.ranked()[0]

    def subtype(self) -> str:
        """Second-highest-scoring trait id."""
        return self.ranked()[1]


# =============================================================================
# DEPTH / STYLE METRICS
# =============================================================================

def _from_loose_dict(cls, d: Optional[Mapping[str, Any]]):
    d = d or {}
    kwargs = {}
    for f in fields(cls):
        if f.name in d:
            kwargs[f.name] = _as_score(d[f.name])
    return cls(**kwargs)


@dataclass(frozen=True)
class DepthMetrics:
    """How deep the user's sessions go."""
    edit_test_loop_count: float = 0.0
    repeat_edit_same_file_count: float = 0.0
    phase_switch_count: float = 0.0
    total_sessions: float = 0.0

    def normalized_loops(self) -> float:
        """Edit-test loops per session, normalized so 5/session reads as 1.0."""
        if self.total_sessions <= 0:
            return 0.0
        return min(1.0, self.edit_test_loop_count / max(1.0, self.total_sessions * 5))

    def loop_density(self) -> float:
        """Raw edit-test loops per session."""
        if self.total_sessions <= 0:
            return 0.0
        return self.edit_test_loop_count / self.total_sessions

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Optional[Mapping[str, Any]]) -> 'DepthMetrics':
        return _from_loose_dict(cls, d)


@dataclass(frozen=True)
class StyleMetrics:
    """Textual style of the user's messages."""
    bullet_ratio: float = 0.0
    question_ratio: float = 0.0
    codeblock_ratio: float = 0.0
    avg_message_len: float = 0.0
    message_len_std: float = 0.0
    heading_ratio: float = 0.0

    def complexity(self) -> float:
        """Structured-writing score used to pick the body pattern."""
        return self.codeblock_ratio + self.bullet_ratio + self.heading_ratio

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Optional[Mapping[str, Any]]) -> 'StyleMetrics':
        return _from_loose_dict(cls, d)
