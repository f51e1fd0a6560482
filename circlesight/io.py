"""Circle sets on disk: JSON input and plain-data output."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path

from circlesight.model import Analysis, Circle, parse_flag


def _circles_from_dict(d: dict) -> tuple[list[Circle], dict[str, bool]]:
    records = d.get("circles")
    if not isinstance(records, list):
        raise ValueError("circle file must contain a 'circles' list")
    circles: list[Circle] = []
    for index, record in enumerate(records):
        try:
            circles.append(Circle.from_dict(record))
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"circle #{index}: malformed record ({e!r})") from e

    groups = d.get("groups", [])
    if not isinstance(groups, list):
        raise ValueError("'groups' must be a list")
    group_visibility: dict[str, bool] = {}
    for index, group in enumerate(groups):
        try:
            group_visibility[str(group["id"])] = parse_flag(group.get("visible", True))
        except (KeyError, TypeError, AttributeError, ValueError) as e:
            raise ValueError(f"group #{index}: malformed record ({e!r})") from e
    return circles, group_visibility


def load_circles(path: Path) -> tuple[list[Circle], dict[str, bool]]:
    """Deserialize circles and group visibility from JSON.

    Expected shape::

        {"circles": [{"id": "a", "lat": 0.0, "lng": 0.0, "radius_m": 1000}],
         "groups": [{"id": "g1", "visible": true}]}

    A bare list is accepted as the ``circles`` value.
    """
    data = json.loads(path.read_text())
    if isinstance(data, list):
        data = {"circles": data}
    if not isinstance(data, dict):
        raise ValueError("circle file must hold a JSON object or list")
    return _circles_from_dict(data)


def analyses_to_dict(analyses: Mapping[str, Analysis]) -> dict:
    return {key: analysis.to_dict() for key, analysis in analyses.items()}
