"""Runtime configuration for circlesight."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from pathlib import Path

EARTH_RADIUS_M = 6_371_000.0
CONSENSUS_FRACTION = 0.3
MIN_CONSENSUS_CANDIDATES = 3
SCORE_DAMPING = 1.0
CONFIDENCE_SCALE_M = 50.0  # RMSE at which confidence drops to 0.5
MIN_CIRCLES = 3


class OutputFormat(Enum):
    TABLE = "table"
    JSON = "json"


@dataclass
class CircleSightConfig:
    # Estimator tunables
    earth_radius_m: float = EARTH_RADIUS_M
    consensus_fraction: float = CONSENSUS_FRACTION
    min_consensus_candidates: int = MIN_CONSENSUS_CANDIDATES
    score_damping: float = SCORE_DAMPING
    confidence_scale_m: float = CONFIDENCE_SCALE_M
    min_circles: int = MIN_CIRCLES

    # Input / output
    circles_path: Path | None = None
    output: OutputFormat = OutputFormat.TABLE

    # Paths
    data_dir: Path = field(default_factory=lambda: Path.home() / ".circlesight")

    def __post_init__(self):
        if self.earth_radius_m <= 0:
            raise ValueError("earth_radius_m must be positive")
        if not 0.0 < self.consensus_fraction <= 1.0:
            raise ValueError("consensus_fraction must be in (0, 1]")
        if self.min_consensus_candidates < 1:
            raise ValueError("min_consensus_candidates must be at least 1")
        if self.score_damping <= 0:
            raise ValueError("score_damping must be positive")
        if self.confidence_scale_m <= 0:
            raise ValueError("confidence_scale_m must be positive")
        if self.min_circles < 3:
            raise ValueError("min_circles must be at least 3")


_FLOAT_KEYS = {
    "earth_radius_m",
    "consensus_fraction",
    "score_damping",
    "confidence_scale_m",
}
_INT_KEYS = {"min_consensus_candidates", "min_circles"}


def load_config_file(path: Path) -> dict:
    """Load config overrides from a TOML file. Returns empty dict if not found."""
    if not path.exists():
        return {}
    import tomllib
    data = tomllib.loads(path.read_text())
    # Estimator tunables may live under an [estimator] table.
    estimator = data.pop("estimator", None)
    if isinstance(estimator, dict):
        data.update(estimator)
    return data


def apply_overrides(config: CircleSightConfig, overrides: dict) -> CircleSightConfig:
    """Apply dict overrides (from TOML or CLI) onto a config."""
    known = {f.name for f in fields(config)}
    for key, value in overrides.items():
        if key not in known:
            continue
        if key == "output" and isinstance(value, str):
            config.output = OutputFormat(value.lower().strip())
        elif key in ("data_dir", "circles_path") and isinstance(value, str):
            setattr(config, key, Path(value).expanduser())
        elif key in _FLOAT_KEYS:
            setattr(config, key, _as_number(key, value, float))
        elif key in _INT_KEYS:
            setattr(config, key, _as_number(key, value, int))
        else:
            setattr(config, key, value)
    # Re-run validation on the merged values.
    config.__post_init__()
    return config


def _as_number(key: str, value: object, kind: type) -> float | int:
    if isinstance(value, bool) or not isinstance(value, int | float | str):
        raise ValueError(f"{key}: expected a number, got {value!r}")
    try:
        number = float(value)
    except ValueError as e:
        raise ValueError(f"{key}: expected a number, got {value!r}") from e
    if kind is int:
        if not number.is_integer():
            raise ValueError(f"{key}: expected an integer, got {value!r}")
        return int(number)
    return number
