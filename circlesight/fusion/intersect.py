"""Pairwise circle intersection on a local plane."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from enum import Enum
from itertools import combinations

from circlesight.config import EARTH_RADIUS_M
from circlesight.geo.plane import CoordinatePlane
from circlesight.model import Circle, Diagnostic, GeoPoint, Issue, PairCandidate

log = logging.getLogger(__name__)


class PairRelation(Enum):
    SEPARATE = "separate"
    CONTAINED = "contained"
    CONCENTRIC = "concentric"
    INTERSECTING = "intersecting"  # includes tangency


_DEGENERATE = (PairRelation.CONTAINED, PairRelation.CONCENTRIC)


def _relation(d: float, r1: float, r2: float) -> PairRelation:
    # Order matters: equal concentric radii fall through to CONCENTRIC.
    if d > r1 + r2:
        return PairRelation.SEPARATE
    if d < abs(r1 - r2):
        return PairRelation.CONTAINED
    if d == 0:
        return PairRelation.CONCENTRIC
    return PairRelation.INTERSECTING


def _solve(
    c1: Circle,
    c2: Circle,
    radius_m: float,
) -> tuple[PairRelation, list[GeoPoint]]:
    # c1's center is the origin of the working plane.
    plane = CoordinatePlane(c1.center, radius_m=radius_m)
    dx, dy = plane.project(c2.center)
    d = math.hypot(dx, dy)
    r1 = c1.radius_m
    r2 = c2.radius_m

    relation = _relation(d, r1, r2)
    if relation is not PairRelation.INTERSECTING:
        return relation, []

    a = (r1 * r1 - r2 * r2 + d * d) / (2.0 * d)
    h = math.sqrt(max(0.0, r1 * r1 - a * a))
    mx = dx * a / d
    my = dy * a / d

    # Tangent pairs (h == 0) yield the same point twice.
    first = plane.unproject(mx + h * dy / d, my - h * dx / d)
    second = plane.unproject(mx - h * dy / d, my + h * dx / d)
    return relation, [first, second]


def classify_pair(c1: Circle, c2: Circle, radius_m: float = EARTH_RADIUS_M) -> PairRelation:
    """How two circles sit relative to each other on c1's plane."""
    plane = CoordinatePlane(c1.center, radius_m=radius_m)
    dx, dy = plane.project(c2.center)
    return _relation(math.hypot(dx, dy), c1.radius_m, c2.radius_m)


def circle_intersections(
    c1: Circle,
    c2: Circle,
    radius_m: float = EARTH_RADIUS_M,
) -> list[GeoPoint]:
    """Return the 0 or 2 intersection points of two circles."""
    _, points = _solve(c1, c2, radius_m)
    return points


def pairwise_candidates(
    circles: Sequence[Circle],
    radius_m: float = EARTH_RADIUS_M,
) -> tuple[tuple[PairCandidate, ...], tuple[Diagnostic, ...]]:
    """Intersect every pair (i < j) in input order.

    Returns the candidates plus a diagnostic for each contained or concentric
    pair. Separate pairs are simply non-overlapping and produce nothing.
    """
    solved = [
        (c1, c2, *_solve(c1, c2, radius_m))
        for c1, c2 in combinations(circles, 2)
    ]

    candidates = tuple(
        PairCandidate(
            point=point,
            weight=(c1.reliability + c2.reliability) / 2.0,
            parent_ids=(c1.id, c2.id),
        )
        for c1, c2, _, points in solved
        for point in points
    )
    diagnostics = tuple(
        Diagnostic(
            issue=Issue.DEGENERATE_PAIR,
            subject=(c1.id, c2.id),
            detail=relation.value,
        )
        for c1, c2, relation, _ in solved
        if relation in _DEGENERATE
    )
    for diagnostic in diagnostics:
        log.debug("skipping %s pair %s/%s", diagnostic.detail, *diagnostic.subject)
    return candidates, diagnostics
