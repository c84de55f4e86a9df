"""Topology loader from YAML.

Loads a topology definition from YAML, validates it with Pydantic,
checks every neighbor link against the declared nodes and interfaces,
and builds the indexed Topology. A NetworkX view of the links is
available through build_graph.
"""

import logging
from pathlib import Path
from typing import Any

import networkx as nx
import yaml
from pydantic import BaseModel, Field, ValidationError

from ifroute.errors import (
    InterfaceNotFoundError,
    NodeNotFoundError,
    TopologyLoadError,
    TopologyValidationError,
)
from ifroute.model.topology import (
    MAX_IFACE_INDEX,
    MAX_NODE_ID,
    IfaceIndex,
    Interface,
    InterfaceType,
    NodeId,
    Topology,
    TopologyNode,
)

logger = logging.getLogger(__name__)


class LinkSpec(BaseModel):
    """Neighbor reference as written in the topology file."""

    node: int = Field(..., ge=0, le=MAX_NODE_ID, description="Neighbor node id")
    iface: int = Field(..., ge=0, le=MAX_IFACE_INDEX, description="Neighbor interface index")


class InterfaceSpec(BaseModel):
    """Interface entry in the topology file."""

    id: int = Field(..., ge=0, le=MAX_IFACE_INDEX, description="Interface index")
    type: InterfaceType = Field(..., description="Interface role")
    neighbors: list[LinkSpec] = Field(default_factory=list, description="Neighbor links")


class NodeSpec(BaseModel):
    """Node entry in the topology file."""

    id: int = Field(..., ge=0, le=MAX_NODE_ID, description="Node id")
    interfaces: list[InterfaceSpec] = Field(default_factory=list, description="Owned interfaces")


class TopologyFile(BaseModel):
    """Root model for topology YAML file."""

    nodes: list[NodeSpec] = Field(..., min_length=1, description="Topology nodes")


class TopologyLoader:
    """Loads and validates interface topologies from YAML files.

    Example:
        loader = TopologyLoader()
        topology = loader.load("lab.yaml")
    """

    def load(self, path: Path | str) -> Topology:
        """Load topology from YAML file.

        Args:
            path: Path to topology YAML file

        Returns:
            Validated Topology

        Raises:
            TopologyLoadError: If file cannot be read
            TopologyValidationError: If topology data is invalid
            NodeNotFoundError: If a link targets an undeclared node
            InterfaceNotFoundError: If a link targets an undeclared interface
        """
        path = Path(path)
        raw_data = self._load_yaml(path)
        topology = self.load_data(raw_data)
        logger.info(
            "Loaded %s: %d nodes, %d interfaces, %d links",
            path, topology.node_count, topology.interface_count, topology.link_count,
        )
        return topology

    def load_data(self, data: dict[str, Any]) -> Topology:
        """Build a Topology from already-parsed data."""
        topology_file = self._validate_topology_file(data)
        topology = self._build_topology(topology_file)
        self._validate_links(topology)
        return topology

    def _load_yaml(self, path: Path) -> dict[str, Any]:
        """Read the topology document; it must be a YAML mapping with ``nodes``."""
        if not path.exists():
            raise TopologyLoadError(
                f"Topology file not found: {path}",
                {"path": str(path)},
            )

        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except yaml.MarkedYAMLError as e:
            details: dict[str, Any] = {"path": str(path)}
            if e.problem_mark is not None:
                details["line"] = e.problem_mark.line + 1
                details["column"] = e.problem_mark.column + 1
            raise TopologyLoadError(
                f"Malformed topology YAML: {e.problem or e}",
                details,
            ) from e
        except yaml.YAMLError as e:
            raise TopologyLoadError(
                f"Malformed topology YAML: {e}",
                {"path": str(path)},
            ) from e
        except OSError as e:
            raise TopologyLoadError(
                f"Cannot read topology file: {e}",
                {"path": str(path)},
            ) from e

        if not isinstance(data, dict):
            raise TopologyLoadError(
                "Topology file must be a mapping with a 'nodes' list",
                {"path": str(path), "found": type(data).__name__},
            )

        return data

    def _validate_topology_file(self, data: dict[str, Any]) -> TopologyFile:
        """Validate raw data against TopologyFile schema.

        Each schema error is reported against the node or interface entry
        it belongs to, e.g. ``node 0xa, interface 1, type: ...``.
        """
        try:
            return TopologyFile.model_validate(data)
        except ValidationError as e:
            entries = [
                f"{entry_label(data, err['loc'])}: {err['msg']}" for err in e.errors()
            ]
            message = f"Invalid topology entry {entries[0]}"
            if len(entries) > 1:
                message += f" (and {len(entries) - 1} more)"
            raise TopologyValidationError(
                message,
                {"entries": entries, "errors": e.errors()},
            ) from e

    def _build_topology(self, topo_file: TopologyFile) -> Topology:
        """Build indexed Topology, rejecting duplicate ids."""
        topology = Topology()

        for node_spec in topo_file.nodes:
            if node_spec.id in topology.nodes:
                raise TopologyValidationError(
                    f"Duplicate node id: {node_spec.id:#x}",
                    {"node": node_spec.id},
                )

            node = TopologyNode(id=NodeId(node_spec.id))
            for if_spec in node_spec.interfaces:
                if if_spec.id in node.ifaces:
                    raise TopologyValidationError(
                        f"Duplicate interface {if_spec.id} on node {node_spec.id:#x}",
                        {"node": node_spec.id, "iface": if_spec.id},
                    )
                iface = Interface(id=IfaceIndex(if_spec.id), if_type=if_spec.type)
                for link in if_spec.neighbors:
                    iface.add_neighbor(NodeId(link.node), IfaceIndex(link.iface))
                node.add_iface(iface)

            topology.add_node(node)

        return topology

    def _validate_links(self, topology: Topology) -> None:
        """Check that every link points at a real (node, interface) pair."""
        for node_id, node in topology.nodes.items():
            for iface in node.ifaces.values():
                if iface.neighbors and not iface.is_local_net:
                    raise TopologyValidationError(
                        f"Interface {node_id:#x}/{iface.id} is {iface.if_type.value} "
                        "and cannot have neighbors",
                        {"node": node_id, "iface": iface.id},
                    )

                for link in iface.neighbors:
                    if link.node not in topology.nodes:
                        raise NodeNotFoundError(link.node)
                    neighbor = topology.nodes[link.node]
                    if link.iface not in neighbor.ifaces:
                        raise InterfaceNotFoundError(link.node, link.iface)

                    back = topology.get_adjacent_interface(link.node, link.iface, node_id)
                    if back != iface.id:
                        logger.warning(
                            "Link %#x/%s -> %#x/%s is not mirrored by the neighbor",
                            node_id, iface.id, link.node, link.iface,
                        )


def build_graph(topology: Topology) -> nx.MultiDiGraph:
    """Build a NetworkX MultiDiGraph with one edge per declared link.

    Edges are keyed by ``(local_iface, neighbor_iface)`` so parallel links
    between the same pair of nodes stay distinct. Nodes carry the count of
    their interfaces per type.
    """
    graph = nx.MultiDiGraph()

    for node_id, node in topology.nodes.items():
        type_counts = {if_type.value: 0 for if_type in InterfaceType}
        for iface in node.ifaces.values():
            type_counts[iface.if_type.value] += 1
        graph.add_node(node_id, **type_counts)

    for node_id, node in topology.nodes.items():
        for iface in node.ifaces.values():
            for link in iface.neighbors:
                graph.add_edge(node_id, link.node, key=(iface.id, link.iface))

    return graph


_ENTRY_NAMES = {"nodes": "node", "interfaces": "interface", "neighbors": "neighbor"}


def entry_label(data: Any, loc: tuple[int | str, ...]) -> str:
    """Describe a pydantic error location by the entries it passes through.

    ``("nodes", 0, "interfaces", 1, "type")`` becomes
    ``"node 0xa, interface 1, type"`` when the raw entries carry ids, and
    falls back to positions (``node #0``) when they do not.
    """
    parts: list[str] = []
    current = data
    i = 0
    while i < len(loc):
        key = loc[i]
        if key in _ENTRY_NAMES and i + 1 < len(loc) and isinstance(loc[i + 1], int):
            index = loc[i + 1]
            try:
                current = current[key][index]
            except (KeyError, IndexError, TypeError):
                current = None
            ident = current.get("id") if isinstance(current, dict) else None
            if key == "nodes" and isinstance(ident, int):
                parts.append(f"node {ident:#x}")
            elif key == "interfaces" and isinstance(ident, int):
                parts.append(f"interface {ident}")
            else:
                parts.append(f"{_ENTRY_NAMES[key]} #{index}")
            i += 2
        else:
            parts.append(str(key))
            i += 1
    return ", ".join(parts)
