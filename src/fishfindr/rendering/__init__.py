"""Scatter-plot rendering of clustering results."""

from .groups import NOISE_GROUP_LABEL, PointGroup, point_groups
from .plot import render_png

__all__ = ["NOISE_GROUP_LABEL", "PointGroup", "point_groups", "render_png"]
