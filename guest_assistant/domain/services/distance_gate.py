"""Pure distance gating for retrieved chunks.

Why: The confidence gate decides whether anything retrieved is trustworthy
enough to show the model. Lower distance = more relevant.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..models import ScoredChunk


@dataclass(frozen=True)
class GateResult:
    """Outcome of the distance gate.

    - passed:                     best candidate is within max_distance
    - evidence:                   accepted chunks, ascending by distance, at most k
    - best_distance:              closest distance seen (None if nothing came back)
    - used_single_best_fallback:  the filter emptied, so only the best chunk was kept
    """

    passed: bool
    evidence: tuple[ScoredChunk, ...] = ()
    best_distance: float | None = None
    used_single_best_fallback: bool = False


def sort_by_distance(candidates: Sequence[ScoredChunk]) -> list[ScoredChunk]:
    """Stable ascending sort; the index's own ordering is not trusted."""
    return sorted(candidates, key=lambda sc: sc.distance)


def apply_distance_gate(
    candidates: Sequence[ScoredChunk], max_distance: float, k: int
) -> GateResult:
    ranked = sort_by_distance(candidates)
    if not ranked:
        return GateResult(passed=False)

    best = ranked[0]
    if best.distance > max_distance:
        return GateResult(passed=False, best_distance=best.distance)

    evidence = [sc for sc in ranked if sc.distance <= max_distance][:k]
    if not evidence:
        return GateResult(
            passed=True,
            evidence=(best,),
            best_distance=best.distance,
            used_single_best_fallback=True,
        )
    return GateResult(passed=True, evidence=tuple(evidence), best_distance=best.distance)
