from __future__ import annotations

from rich.console import Console

from circlesight.fusion.runtime import analyze, analyze_groups
from circlesight.model import Circle, GeoPoint
from circlesight.ui.report import print_report


def _render(analyses) -> str:
    console = Console(record=True, width=120)
    print_report(analyses, console=console)
    return console.export_text()


def test_report_explains_missing_geometry() -> None:
    circles = [
        Circle(id="A", center=GeoPoint(0.0, 0.0), radius_m=1000.0),
        Circle(id="B", center=GeoPoint(0.0, 0.02), radius_m=1000.0),
        Circle(id="C", center=GeoPoint(0.015, 0.01), radius_m=1000.0),
    ]
    output = _render({"field": analyze(circles, group_id="field")})

    assert "field" in output
    assert "no-geometric-consensus" in output
    assert "no two circles overlap" in output


def test_report_lists_skipped_circles() -> None:
    circles = [
        Circle(id="ok-1", center=GeoPoint(0.0, 0.0), radius_m=1000.0),
        Circle(id="ok-2", center=GeoPoint(0.0, 0.01), radius_m=1000.0),
        Circle(id="broken", center=GeoPoint(0.0, 0.0), radius_m=0.0),
    ]
    output = _render(analyze_groups(circles))

    assert "insufficient-circles" in output
    assert "invalid-circle broken" in output


def test_report_handles_empty_input() -> None:
    assert "no visible circles" in _render({})
