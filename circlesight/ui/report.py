"""Terminal report of engine results using rich."""

from __future__ import annotations

from collections.abc import Mapping

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from circlesight.model import Analysis, Issue

_STATUS_HINTS = {
    Issue.INSUFFICIENT_CIRCLES: "add at least three valid circles for a best fit",
    Issue.NO_GEOMETRIC_CONSENSUS: "no two circles overlap; widen a radius or move a center",
}


def _confidence_style(confidence: float) -> str:
    if confidence >= 0.8:
        return "green"
    if confidence >= 0.5:
        return "yellow"
    return "red"


def _header(key: str, analysis: Analysis) -> Text:
    title = Text()
    title.append(key, "bold white")
    title.append(f"  {len(analysis.candidates)} candidates", "dim")
    if analysis.status is None:
        title.append("  best fit", "green")
    else:
        title.append(f"  {analysis.status.value}", "yellow")
    return title


def _candidate_table(analysis: Analysis, max_rows: int) -> Table:
    table = Table(show_edge=False, pad_edge=False, expand=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("lat", justify="right")
    table.add_column("lng", justify="right")
    table.add_column("weight", justify="right")
    table.add_column("parents", style="cyan")
    for index, candidate in enumerate(analysis.candidates[:max_rows]):
        table.add_row(
            str(index),
            f"{candidate.point.lat:.6f}",
            f"{candidate.point.lng:.6f}",
            f"{candidate.weight:.2f}",
            "/".join(candidate.parent_ids),
        )
    hidden = len(analysis.candidates) - max_rows
    if hidden > 0:
        table.add_row("", "", "", "", Text(f"... {hidden} more", "dim"))
    return table


def _summary(analysis: Analysis) -> Text:
    text = Text()
    consensus = analysis.consensus
    if consensus is not None:
        text.append("best fit ", "bold")
        text.append(f"{consensus.point.lat:.6f}, {consensus.point.lng:.6f}", "cyan")
        text.append("  confidence ")
        text.append(f"{consensus.confidence:.2f}", _confidence_style(consensus.confidence))
        text.append(f"  ±{consensus.uncertainty_radius_m:.1f} m", "dim")
    elif analysis.status is not None:
        text.append(_STATUS_HINTS.get(analysis.status, analysis.status.value), "yellow")

    skipped = [
        d for d in analysis.diagnostics
        if d.issue in (Issue.INVALID_CIRCLE, Issue.DEGENERATE_PAIR)
    ]
    for diagnostic in skipped:
        text.append("\n")
        text.append(f"{diagnostic.issue.value} ", "dim red")
        text.append("/".join(diagnostic.subject), "dim")
    return text


def render_analysis(key: str, analysis: Analysis, max_rows: int = 12) -> Panel:
    """Build one panel for a group's analysis."""
    body: list = []
    if analysis.candidates:
        body.append(_candidate_table(analysis, max_rows))
    body.append(_summary(analysis))
    border = "blue" if analysis.status is None else "dim"
    return Panel(Group(*body), title=_header(key, analysis), title_align="left", border_style=border)


def print_report(
    analyses: Mapping[str, Analysis],
    console: Console | None = None,
) -> None:
    console = console or Console()
    if not analyses:
        console.print(Text("no visible circles", "dim"))
        return
    for key, analysis in analyses.items():
        console.print(render_analysis(key, analysis))
