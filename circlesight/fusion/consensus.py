"""Consensus location from the lowest-residual cluster of pairwise candidates."""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

from circlesight.config import CircleSightConfig
from circlesight.fusion.intersect import pairwise_candidates
from circlesight.fusion.scoring import rmse, score_candidates
from circlesight.model import Circle, ConsensusResult, GeoPoint, PairCandidate


def consensus_size(candidate_count: int, config: CircleSightConfig) -> int:
    """How many top-ranked candidates form the consensus set."""
    return max(
        config.min_consensus_candidates,
        math.ceil(candidate_count * config.consensus_fraction),
    )


def confidence_from_rmse(error_m: float, config: CircleSightConfig) -> float:
    """Decays from 1.0 at zero error; config.confidence_scale_m maps to 0.5."""
    return 1.0 / (1.0 + (error_m / config.confidence_scale_m))


def _weighted_centroid(
    selected: Sequence[tuple[PairCandidate, float]],
    damping: float,
) -> GeoPoint:
    lats = np.array([candidate.point.lat for candidate, _ in selected], dtype=np.float64)
    lngs = np.array([candidate.point.lng for candidate, _ in selected], dtype=np.float64)
    # Parent reliability scaled by inverse score; damping keeps a zero score finite.
    weights = np.array(
        [candidate.weight * (1.0 / (score + damping)) for candidate, score in selected],
        dtype=np.float64,
    )
    return GeoPoint(
        lat=float(np.average(lats, weights=weights)),
        lng=float(np.average(lngs, weights=weights)),
    )


def estimate_consensus(
    circles: Sequence[Circle],
    candidates: Sequence[PairCandidate] | None = None,
    config: CircleSightConfig | None = None,
) -> ConsensusResult | None:
    """Estimate a single best-fit location for three or more valid circles.

    Args:
        circles: valid circles only; see ``runtime.analyze`` for filtering.
        candidates: pairwise candidates for the same circles. Generated when
            not supplied.
        config: estimator tunables.

    Returns:
        The consensus result, or None when there are too few circles or no
        pair of circles intersects.
    """
    config = config or CircleSightConfig()
    if len(circles) < config.min_circles:
        return None
    if candidates is None:
        candidates, _ = pairwise_candidates(circles, radius_m=config.earth_radius_m)
    if not candidates:
        return None

    scores = score_candidates(candidates, circles, radius_m=config.earth_radius_m)
    # sorted() is stable, so ties keep pair order.
    ranked = sorted(zip(candidates, scores), key=lambda item: item[1])
    selected = ranked[: consensus_size(len(ranked), config)]

    point = _weighted_centroid(selected, config.score_damping)
    error_m = rmse(point, circles, radius_m=config.earth_radius_m)

    return ConsensusResult(
        point=point,
        confidence=confidence_from_rmse(error_m, config),
        uncertainty_radius_m=error_m,
        contributing_ids=frozenset(c.id for c in circles),
    )
