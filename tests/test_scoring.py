from __future__ import annotations

import pytest

from circlesight.fusion.scoring import rmse, score_candidate, score_candidates
from circlesight.geo.distance import destination_point, haversine_m
from circlesight.model import Circle, GeoPoint, PairCandidate


def _circle_through(target: GeoPoint, circle_id: str, distance: float, bearing: float,
                    offset: float = 0.0, reliability: float = 1.0) -> Circle:
    center = destination_point(target, distance, bearing)
    return Circle(
        id=circle_id,
        center=center,
        radius_m=haversine_m(center, target) + offset,
        reliability=reliability,
    )


def test_score_is_zero_on_every_perimeter() -> None:
    target = GeoPoint(52.52, 13.405)
    circles = [
        _circle_through(target, "a", 800.0, 10.0),
        _circle_through(target, "b", 600.0, 140.0),
        _circle_through(target, "c", 900.0, 250.0),
    ]
    assert score_candidate(target, circles) < 1e-12


def test_score_weights_residuals_by_reliability() -> None:
    target = GeoPoint(52.52, 13.405)
    circles = [
        _circle_through(target, "a", 1000.0, 0.0, offset=10.0, reliability=1.0),
        _circle_through(target, "b", 500.0, 90.0, reliability=0.5),
    ]
    # (1.0 * 10^2 + 0.5 * 0^2) / 1.5
    assert score_candidate(target, circles) == pytest.approx(100.0 / 1.5, rel=1e-6)


def test_score_candidates_preserves_order() -> None:
    target = GeoPoint(52.52, 13.405)
    circles = [
        _circle_through(target, "a", 1000.0, 0.0),
        _circle_through(target, "b", 500.0, 90.0),
    ]
    near = PairCandidate(point=target, weight=1.0, parent_ids=("a", "b"))
    far = PairCandidate(
        point=destination_point(target, 300.0, 200.0), weight=1.0, parent_ids=("a", "b")
    )

    scores = score_candidates([far, near], circles)
    assert scores[0] > scores[1]
    assert scores[1] == pytest.approx(score_candidate(target, circles), abs=1e-12)


def test_rmse_is_unweighted() -> None:
    target = GeoPoint(52.52, 13.405)
    circles = [
        _circle_through(target, "a", 1000.0, 0.0, offset=3.0, reliability=0.1),
        _circle_through(target, "b", 500.0, 90.0, offset=-4.0, reliability=1.0),
    ]
    assert rmse(target, circles) == pytest.approx(((9.0 + 16.0) / 2.0) ** 0.5, rel=1e-6)
