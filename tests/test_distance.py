from __future__ import annotations

import math

import numpy as np

from circlesight.config import EARTH_RADIUS_M
from circlesight.geo.distance import (
    destination_point,
    haversine_m,
    haversine_many,
    initial_bearing_deg,
)
from circlesight.model import GeoPoint


def test_haversine_one_degree_of_latitude() -> None:
    d = haversine_m(GeoPoint(10.0, 20.0), GeoPoint(11.0, 20.0))
    assert abs(d - EARTH_RADIUS_M * math.pi / 180.0) < 1e-6


def test_haversine_is_zero_for_identical_points() -> None:
    p = GeoPoint(48.8566, 2.3522)
    assert haversine_m(p, p) == 0.0


def test_haversine_many_matches_scalar() -> None:
    origin = GeoPoint(40.4168, -3.7038)
    others = [GeoPoint(40.42, -3.70), GeoPoint(40.40, -3.71), GeoPoint(41.0, -3.0)]
    distances = haversine_many(
        origin,
        np.array([p.lat for p in others]),
        np.array([p.lng for p in others]),
    )
    for expected_point, got in zip(others, distances):
        assert abs(haversine_m(origin, expected_point) - float(got)) < 1e-6


def test_destination_point_travels_requested_distance_and_bearing() -> None:
    start = GeoPoint(51.5007, -0.1246)
    end = destination_point(start, 2500.0, 73.0)

    assert abs(haversine_m(start, end) - 2500.0) < 1e-6
    assert abs(initial_bearing_deg(start, end) - 73.0) < 1e-6


def test_haversine_is_finite_for_antipodal_points() -> None:
    a = GeoPoint(-6.377647337239125, -163.4650398437419)
    b = GeoPoint(6.377647337239125, 16.53496015625811)
    half_circumference = EARTH_RADIUS_M * math.pi

    assert abs(haversine_m(a, b) - half_circumference) < 1.0
    distances = haversine_many(a, np.array([b.lat]), np.array([b.lng]))
    assert np.all(np.isfinite(distances))
    assert abs(float(distances[0]) - half_circumference) < 1.0
