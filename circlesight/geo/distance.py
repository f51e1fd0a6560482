"""Great-circle distance and bearing on a spherical Earth."""

from __future__ import annotations

import math

import numpy as np

from circlesight.config import EARTH_RADIUS_M
from circlesight.model import GeoPoint


def haversine_m(a: GeoPoint, b: GeoPoint, radius_m: float = EARTH_RADIUS_M) -> float:
    """Haversine great-circle distance in meters."""
    p1 = math.radians(a.lat)
    p2 = math.radians(b.lat)
    dphi = p2 - p1
    dl = math.radians(b.lng - a.lng)
    h = math.sin(dphi / 2.0) ** 2 + math.cos(p1) * math.cos(p2) * math.sin(dl / 2.0) ** 2
    # Rounding can push h past 1 for near-antipodal points.
    h = min(1.0, max(0.0, h))
    return 2.0 * radius_m * math.atan2(math.sqrt(h), math.sqrt(1.0 - h))


def haversine_many(
    point: GeoPoint,
    lats: np.ndarray,
    lngs: np.ndarray,
    radius_m: float = EARTH_RADIUS_M,
) -> np.ndarray:
    """Distances in meters from one point to many (lat, lng) pairs in degrees."""
    p1 = math.radians(point.lat)
    p2 = np.radians(lats)
    dphi = p2 - p1
    dl = np.radians(lngs - point.lng)
    h = np.sin(dphi / 2.0) ** 2 + math.cos(p1) * np.cos(p2) * np.sin(dl / 2.0) ** 2
    h = np.clip(h, 0.0, 1.0)
    return 2.0 * radius_m * np.arctan2(np.sqrt(h), np.sqrt(1.0 - h))


def initial_bearing_deg(a: GeoPoint, b: GeoPoint) -> float:
    """Initial great-circle bearing from a to b (degrees, 0..360)."""
    phi1, phi2 = math.radians(a.lat), math.radians(b.lat)
    dl = math.radians(b.lng - a.lng)
    y = math.sin(dl) * math.cos(phi2)
    x = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(dl)
    return (math.degrees(math.atan2(y, x)) + 360.0) % 360.0


def destination_point(
    start: GeoPoint,
    distance_m: float,
    bearing_deg: float,
    radius_m: float = EARTH_RADIUS_M,
) -> GeoPoint:
    """Point reached by travelling distance_m from start along bearing_deg."""
    delta = distance_m / radius_m
    theta = math.radians(bearing_deg)
    phi1 = math.radians(start.lat)
    lam1 = math.radians(start.lng)

    phi2 = math.asin(
        math.sin(phi1) * math.cos(delta)
        + math.cos(phi1) * math.sin(delta) * math.cos(theta)
    )
    lam2 = lam1 + math.atan2(
        math.sin(theta) * math.sin(delta) * math.cos(phi1),
        math.cos(delta) - math.sin(phi1) * math.sin(phi2),
    )
    return GeoPoint(lat=math.degrees(phi2), lng=math.degrees(lam2))
