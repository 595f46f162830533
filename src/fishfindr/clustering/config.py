"""Clustering parameters with the operational defaults.

All parameters can be overridden via ``config/clustering.yaml``.
If the file does not exist, defaults are used.
"""

from __future__ import annotations

from pathlib import Path

import structlog
import yaml
from pydantic import BaseModel, ValidationError, model_validator

from fishfindr.errors import InvalidParameterError

from .distance import MetricName

# Half a mile in kilometres.  Applied to raw degree deltas by the planar
# metric, so it only approximates half a mile near the calibration latitude.
DEFAULT_EPSILON = 0.804672
DEFAULT_MIN_POINTS = 3


class ClusteringConfig(BaseModel):
    """Parameters for one density-based clustering pass."""

    epsilon: float = DEFAULT_EPSILON
    min_points: int = DEFAULT_MIN_POINTS
    metric: MetricName = "planar"

    @model_validator(mode="after")
    def warn_on_unit_mismatch(self) -> "ClusteringConfig":
        """Log a warning when a haversine radius looks like a degree value."""
        if self.metric == "haversine" and 0 < self.epsilon < 0.01:
            structlog.get_logger().warning(
                "clustering_epsilon_suspicious",
                metric=self.metric,
                epsilon=self.epsilon,
                hint="haversine epsilon is measured in kilometres",
            )
        return self


def load_clustering_config(path: Path) -> ClusteringConfig:
    """Load clustering parameters from a YAML file.

    A missing file yields the defaults; keys absent from the file keep
    their default values.

    Raises:
        InvalidParameterError: the file is not a YAML mapping of valid
            clustering parameters.
    """
    if not path.exists():
        return ClusteringConfig()

    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise InvalidParameterError(f"{path}: not valid YAML: {exc}") from exc

    if not isinstance(data, dict):
        raise InvalidParameterError(f"{path}: expected a mapping of clustering parameters")

    try:
        return ClusteringConfig.model_validate(data)
    except ValidationError as exc:
        raise InvalidParameterError(f"{path}: invalid clustering parameters: {exc}") from exc
