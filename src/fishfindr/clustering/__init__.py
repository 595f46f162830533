"""Density-based clustering of catch locations into hot spots.

Turns a list of (latitude, longitude) points into labelled clusters and a
noise set using DBSCAN over a networkx reachability graph.
"""

from .config import ClusteringConfig, load_clustering_config
from .dbscan import NOISE, Cluster, ClusterResult, Point, cluster_points
from .distance import get_metric, haversine_km, planar_distance

__all__ = [
    "NOISE",
    "Cluster",
    "ClusterResult",
    "ClusteringConfig",
    "Point",
    "cluster_points",
    "get_metric",
    "haversine_km",
    "load_clustering_config",
    "planar_distance",
]
