"""Weighted residual scoring of candidate points against a circle set."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from circlesight.config import EARTH_RADIUS_M
from circlesight.geo.distance import haversine_many
from circlesight.model import Circle, GeoPoint, PairCandidate


class CircleArrays:
    """Column view of a circle set so scoring does not rebuild it per point."""

    def __init__(self, circles: Sequence[Circle]) -> None:
        self.lats = np.array([c.center.lat for c in circles], dtype=np.float64)
        self.lngs = np.array([c.center.lng for c in circles], dtype=np.float64)
        self.radii = np.array([c.radius_m for c in circles], dtype=np.float64)
        self.weights = np.array([c.reliability for c in circles], dtype=np.float64)

    def __len__(self) -> int:
        return int(self.radii.size)

    def residuals(self, point: GeoPoint, radius_m: float = EARTH_RADIUS_M) -> np.ndarray:
        """Distance to each center minus that circle's radius, in meters."""
        return haversine_many(point, self.lats, self.lngs, radius_m=radius_m) - self.radii


def _weighted_squared_error(
    point: GeoPoint,
    arrays: CircleArrays,
    radius_m: float,
) -> float:
    residuals = arrays.residuals(point, radius_m=radius_m)
    weighted = float(np.sum(arrays.weights * residuals**2))
    total_weight = float(np.sum(arrays.weights))
    if total_weight <= 0:
        return weighted
    return weighted / total_weight


def score_candidate(
    point: GeoPoint,
    circles: Sequence[Circle],
    radius_m: float = EARTH_RADIUS_M,
) -> float:
    """Reliability-weighted mean squared residual (m^2). Lower is better.

    Used to rank candidates only; nothing is fitted here.
    """
    return _weighted_squared_error(point, CircleArrays(circles), radius_m)


def score_candidates(
    candidates: Sequence[PairCandidate],
    circles: Sequence[Circle],
    radius_m: float = EARTH_RADIUS_M,
) -> tuple[float, ...]:
    """Score every candidate against the same circles, preserving order."""
    arrays = CircleArrays(circles)
    return tuple(
        _weighted_squared_error(candidate.point, arrays, radius_m)
        for candidate in candidates
    )


def rmse(point: GeoPoint, circles: Sequence[Circle], radius_m: float = EARTH_RADIUS_M) -> float:
    """Unweighted root mean square residual of point against all circles."""
    residuals = CircleArrays(circles).residuals(point, radius_m=radius_m)
    if residuals.size == 0:
        return 0.0
    return float(np.sqrt(np.mean(residuals**2)))
