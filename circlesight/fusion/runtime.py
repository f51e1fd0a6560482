"""Engine entry points: validate circles, intersect, and estimate consensus."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence

from circlesight.config import CircleSightConfig
from circlesight.fusion.consensus import estimate_consensus
from circlesight.fusion.intersect import pairwise_candidates
from circlesight.model import Analysis, Circle, Diagnostic, Issue

log = logging.getLogger(__name__)

UNGROUPED = "ungrouped"


def validate_circles(
    circles: Iterable[Circle],
) -> tuple[tuple[Circle, ...], tuple[Diagnostic, ...]]:
    """Split circles into usable ones and diagnostics for the rest."""
    circles = tuple(circles)
    valid = tuple(c for c in circles if c.is_valid())
    rejected = tuple(
        Diagnostic(
            issue=Issue.INVALID_CIRCLE,
            subject=(c.id,),
            detail=(
                f"center=({c.center.lat}, {c.center.lng}) "
                f"radius_m={c.radius_m} reliability={c.reliability}"
            ),
        )
        for c in circles
        if not c.is_valid()
    )
    for diagnostic in rejected:
        log.debug("dropping invalid circle %s: %s", diagnostic.subject[0], diagnostic.detail)
    return valid, rejected


def analyze(
    circles: Sequence[Circle],
    config: CircleSightConfig | None = None,
    group_id: str | None = None,
) -> Analysis:
    """Run the full engine over one circle set.

    Never raises for bad geometry: invalid circles and degenerate pairs are
    skipped and reported in ``diagnostics``; a missing consensus is explained
    by ``status``.
    """
    if circles is None:
        raise TypeError("circles must be a sequence of Circle, not None")
    config = config or CircleSightConfig()

    valid, diagnostics = validate_circles(circles)
    candidates: tuple = ()
    if len(valid) >= 2:
        candidates, pair_diagnostics = pairwise_candidates(
            valid, radius_m=config.earth_radius_m
        )
        diagnostics += pair_diagnostics

    if len(valid) < config.min_circles:
        status = Issue.INSUFFICIENT_CIRCLES
        consensus = None
    elif not candidates:
        status = Issue.NO_GEOMETRIC_CONSENSUS
        consensus = None
    else:
        consensus = estimate_consensus(valid, candidates, config)
        status = None if consensus is not None else Issue.NO_GEOMETRIC_CONSENSUS

    if status is not None:
        diagnostics += (Diagnostic(issue=status, subject=tuple(c.id for c in valid)),)

    log.debug(
        "analyzed %d circles (%d valid): %d candidates, status=%s",
        len(circles),
        len(valid),
        len(candidates),
        status.value if status is not None else "ok",
    )
    return Analysis(
        candidates=candidates,
        consensus=consensus,
        diagnostics=diagnostics,
        status=status,
        group_id=group_id,
    )


def visible_groups(
    circles: Iterable[Circle],
    group_visibility: Mapping[str, bool] | None = None,
) -> dict[str, list[Circle]]:
    """Partition visible circles by group, in first-appearance order.

    A circle is dropped when it is hidden itself or its group is hidden.
    Groups missing from ``group_visibility`` count as visible.
    """
    group_visibility = group_visibility or {}
    by_group: dict[str, list[Circle]] = {}
    for circle in circles:
        if not circle.visible:
            continue
        if circle.group_id is not None and not group_visibility.get(circle.group_id, True):
            continue
        by_group.setdefault(circle.group_id or UNGROUPED, []).append(circle)
    return by_group


def analyze_groups(
    circles: Iterable[Circle],
    group_visibility: Mapping[str, bool] | None = None,
    config: CircleSightConfig | None = None,
) -> dict[str, Analysis]:
    """Analyze every visible group independently."""
    if circles is None:
        raise TypeError("circles must be an iterable of Circle, not None")
    return {
        key: analyze(group, config=config, group_id=None if key == UNGROUPED else key)
        for key, group in visible_groups(circles, group_visibility).items()
    }
