"""Main entry point: load circles → analyze per group → report."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from rich.console import Console

from circlesight.config import (
    CircleSightConfig,
    OutputFormat,
    apply_overrides,
    load_config_file,
)
from circlesight.fusion.runtime import analyze_groups
from circlesight.io import analyses_to_dict, load_circles
from circlesight.ui.report import print_report

log = logging.getLogger("circlesight")


def build_config(argv: list[str] | None = None) -> CircleSightConfig:
    parser = argparse.ArgumentParser(
        prog="circlesight",
        description="Pairwise intersections and best-fit location for distance circles",
    )
    parser.add_argument("circles", type=Path, help="JSON file with circles (and groups)")
    parser.add_argument("--config", type=Path, default=None, help="TOML config overrides")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument(
        "--confidence-scale",
        type=float,
        default=None,
        help="RMSE in meters that maps to confidence 0.5",
    )
    parser.add_argument("--debug", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        datefmt="%H:%M:%S",
    )

    config = CircleSightConfig()

    # Load from config files: data dir first, then --config
    if args.config is not None and not args.config.exists():
        parser.error(f"config file not found: {args.config}")
    try:
        # tomllib.TOMLDecodeError is a ValueError.
        file_overrides = load_config_file(config.data_dir / "config.toml")
        if args.config is not None:
            file_overrides.update(load_config_file(args.config))
        apply_overrides(config, file_overrides)
    except ValueError as e:
        parser.error(f"invalid config: {e}")

    # Apply CLI overrides
    config.circles_path = args.circles
    if args.json:
        config.output = OutputFormat.JSON
    if args.confidence_scale is not None:
        try:
            apply_overrides(config, {"confidence_scale_m": args.confidence_scale})
        except ValueError as e:
            parser.error(str(e))

    return config


def run(config: CircleSightConfig, console: Console | None = None) -> int:
    """Analyze the configured circle file. Returns a process exit code."""
    if config.circles_path is None:
        log.error("no circle file given")
        return 2
    try:
        circles, group_visibility = load_circles(config.circles_path)
    except FileNotFoundError:
        log.error("circle file not found: %s", config.circles_path)
        return 2
    except ValueError as e:
        log.error("failed to load %s: %s", config.circles_path, e)
        return 2

    log.debug("loaded %d circles from %s", len(circles), config.circles_path)
    analyses = analyze_groups(circles, group_visibility, config=config)

    console = console or Console()
    if config.output is OutputFormat.JSON:
        console.print_json(json.dumps(analyses_to_dict(analyses)))
    else:
        print_report(analyses, console=console)
    return 0


def main() -> None:
    config = build_config()
    sys.exit(run(config))


if __name__ == "__main__":
    main()
