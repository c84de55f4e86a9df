"""Topology and path models."""

from ifroute.model.loader import TopologyLoader, build_graph
from ifroute.model.path import Path, PathNode
from ifroute.model.topology import (
    IfaceIndex,
    Interface,
    InterfaceType,
    Link,
    NodeId,
    Topology,
    TopologyNode,
)

__all__ = [
    "IfaceIndex",
    "Interface",
    "InterfaceType",
    "Link",
    "NodeId",
    "Path",
    "PathNode",
    "Topology",
    "TopologyLoader",
    "TopologyNode",
    "build_graph",
]
