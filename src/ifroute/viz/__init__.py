"""Console rendering of topologies and paths."""

from ifroute.viz.report import TopologyReport

__all__ = ["TopologyReport"]
