from __future__ import annotations

import math

from circlesight.config import EARTH_RADIUS_M
from circlesight.geo.distance import destination_point
from circlesight.geo.plane import CoordinatePlane
from circlesight.model import GeoPoint


def test_reference_projects_to_origin() -> None:
    ref = GeoPoint(35.6762, 139.6503)
    assert CoordinatePlane(ref).project(ref) == (0.0, 0.0)


def test_project_scales_longitude_by_reference_latitude() -> None:
    ref = GeoPoint(60.0, 10.0)
    x, y = CoordinatePlane(ref).project(GeoPoint(60.0, 10.01))

    assert abs(x - math.radians(0.01) * EARTH_RADIUS_M * 0.5) < 1e-6
    assert y == 0.0


def test_unproject_inverts_project_within_fifty_kilometers() -> None:
    for ref in (GeoPoint(0.0, 0.0), GeoPoint(-33.8688, 151.2093), GeoPoint(64.1466, -21.9426)):
        plane = CoordinatePlane(ref)
        for bearing in range(0, 360, 45):
            for distance in (10.0, 1_000.0, 50_000.0):
                p = destination_point(ref, distance, float(bearing))
                back = plane.unproject(*plane.project(p))
                assert abs(back.lat - p.lat) < 1e-9
                assert abs(back.lng - p.lng) < 1e-9
