"""Local equirectangular plane around a reference point.

Good to well under a meter for spans of a few kilometers and usable up to
roughly 50-100 km. No distortion correction is applied beyond that.
"""

from __future__ import annotations

import math

from circlesight.config import EARTH_RADIUS_M
from circlesight.model import GeoPoint


class CoordinatePlane:
    """Maps geographic degrees to local Cartesian meters and back.

    x grows east, y grows north, and the reference point sits at (0, 0).
    """

    def __init__(self, reference: GeoPoint, radius_m: float = EARTH_RADIUS_M) -> None:
        self.reference = reference
        self.radius_m = radius_m
        self._cos_ref = math.cos(math.radians(reference.lat))

    def project(self, point: GeoPoint) -> tuple[float, float]:
        x = math.radians(point.lng - self.reference.lng) * self.radius_m * self._cos_ref
        y = math.radians(point.lat - self.reference.lat) * self.radius_m
        return x, y

    def unproject(self, x: float, y: float) -> GeoPoint:
        lat = self.reference.lat + math.degrees(y / self.radius_m)
        lng = self.reference.lng + math.degrees(x / (self.radius_m * self._cos_ref))
        return GeoPoint(lat=lat, lng=lng)
