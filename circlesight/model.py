"""Value types shared by the estimation engine and its callers."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum


def parse_flag(value: object, key: str = "visible") -> bool:
    """Accept only JSON booleans, so a string like "false" is rejected."""
    if isinstance(value, bool):
        return value
    raise ValueError(f"{key}: expected true or false, got {value!r}")


@dataclass(frozen=True)
class GeoPoint:
    lat: float  # degrees, -90..90
    lng: float  # degrees, -180..180

    def is_valid(self) -> bool:
        return (
            math.isfinite(self.lat)
            and math.isfinite(self.lng)
            and -90.0 <= self.lat <= 90.0
            and -180.0 <= self.lng <= 180.0
        )

    def to_dict(self) -> dict:
        return {"lat": self.lat, "lng": self.lng}

    @classmethod
    def from_dict(cls, d: dict) -> GeoPoint:
        return cls(lat=float(d["lat"]), lng=float(d["lng"]))


@dataclass(frozen=True)
class Circle:
    """A ranging claim: the true location lies on the perimeter.

    ``reliability`` is the caller's trust in the claim, normalized to (0, 1].
    It defaults to 1.0 (100%) when the caller has no opinion.
    """

    id: str
    center: GeoPoint
    radius_m: float
    reliability: float = 1.0
    group_id: str | None = None
    visible: bool = True

    def is_valid(self) -> bool:
        return (
            self.center.is_valid()
            and math.isfinite(self.radius_m)
            and self.radius_m > 0
            and math.isfinite(self.reliability)
            and 0.0 < self.reliability <= 1.0
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "center": self.center.to_dict(),
            "radius_m": self.radius_m,
            "reliability": self.reliability,
            "group_id": self.group_id,
            "visible": self.visible,
        }

    @classmethod
    def from_dict(cls, d: dict) -> Circle:
        if "center" in d:
            center = GeoPoint.from_dict(d["center"])
        else:
            center = GeoPoint.from_dict(d)

        if "reliability" in d and d["reliability"] is not None:
            reliability = float(d["reliability"])
        elif "reliability_pct" in d and d["reliability_pct"] is not None:
            reliability = float(d["reliability_pct"]) / 100.0
        else:
            reliability = 1.0

        radius = d["radius_m"] if "radius_m" in d else d["radius"]
        return cls(
            id=str(d["id"]),
            center=center,
            radius_m=float(radius),
            reliability=reliability,
            group_id=d.get("group_id"),
            visible=parse_flag(d.get("visible", True)),
        )


@dataclass(frozen=True)
class PairCandidate:
    point: GeoPoint
    weight: float  # mean reliability of the two parents
    parent_ids: tuple[str, str]

    def to_dict(self) -> dict:
        return {
            "point": self.point.to_dict(),
            "weight": self.weight,
            "parent_ids": list(self.parent_ids),
        }


@dataclass(frozen=True)
class ConsensusResult:
    point: GeoPoint
    confidence: float
    uncertainty_radius_m: float
    contributing_ids: frozenset[str]

    def to_dict(self) -> dict:
        return {
            "point": self.point.to_dict(),
            "confidence": self.confidence,
            "uncertainty_radius_m": self.uncertainty_radius_m,
            "contributing_ids": sorted(self.contributing_ids),
        }


class Issue(Enum):
    INVALID_CIRCLE = "invalid-circle"
    INSUFFICIENT_CIRCLES = "insufficient-circles"
    NO_GEOMETRIC_CONSENSUS = "no-geometric-consensus"
    DEGENERATE_PAIR = "degenerate-pair"


@dataclass(frozen=True)
class Diagnostic:
    issue: Issue
    subject: tuple[str, ...] = ()
    detail: str = ""

    def to_dict(self) -> dict:
        return {
            "issue": self.issue.value,
            "subject": list(self.subject),
            "detail": self.detail,
        }


@dataclass(frozen=True)
class Analysis:
    """Everything one engine run produces for a set of circles."""

    candidates: tuple[PairCandidate, ...] = ()
    consensus: ConsensusResult | None = None
    diagnostics: tuple[Diagnostic, ...] = ()
    status: Issue | None = None  # why no consensus was produced, if none was
    group_id: str | None = None

    def to_dict(self) -> dict:
        return {
            "group_id": self.group_id,
            "status": self.status.value if self.status is not None else "ok",
            "candidates": [c.to_dict() for c in self.candidates],
            "consensus": self.consensus.to_dict() if self.consensus is not None else None,
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }
