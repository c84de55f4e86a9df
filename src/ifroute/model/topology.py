"""Network topology data models.

Pydantic models for representing an interface-aware topology:
- Interfaces (typed attachment points holding neighbor links)
- Nodes (own a set of interfaces keyed by IfaceIndex)
- Topology (owns the nodes keyed by NodeId; the root aggregate)

Neighbor links are plain (NodeId, IfaceIndex) values resolved through
the owning Topology on each lookup, so ownership stays tree-shaped.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, NamedTuple, NewType

from pydantic import BaseModel, Field

from ifroute.errors import InterfaceNotFoundError, NodeNotFoundError

if TYPE_CHECKING:
    from ifroute.model.path import Path
    from ifroute.search.enumerator import SearchMode

NodeId = NewType("NodeId", int)
IfaceIndex = NewType("IfaceIndex", int)

MAX_NODE_ID = 0xFFFFFFFF
MAX_IFACE_INDEX = 0xFF


class InterfaceType(str, Enum):
    """Role of an interface on its node."""

    LOCAL_APP = "local-app"
    LOCAL_NET = "local-net"
    INTERNET = "internet"


class Link(NamedTuple):
    """Neighbor reference: the remote node and its interface on the link."""

    node: NodeId
    iface: IfaceIndex


class Interface(BaseModel):
    """A typed attachment point owned by one node.

    LocalApp and Internet interfaces normally have no neighbors. More
    than one neighbor models a shared segment.
    """

    id: IfaceIndex = Field(..., ge=0, le=MAX_IFACE_INDEX, description="Index within the owning node")
    if_type: InterfaceType = Field(..., description="Interface role")
    neighbors: list[Link] = Field(default_factory=list, description="Links to neighbor interfaces")

    def add_neighbor(self, node: NodeId, iface: IfaceIndex) -> None:
        """Append a link to a neighbor interface."""
        self.neighbors.append(Link(node, iface))

    @property
    def is_local_net(self) -> bool:
        return self.if_type == InterfaceType.LOCAL_NET


class TopologyNode(BaseModel):
    """A node and the interfaces it owns."""

    id: NodeId = Field(..., ge=0, le=MAX_NODE_ID, description="Unique node identifier")
    ifaces: dict[IfaceIndex, Interface] = Field(
        default_factory=dict,
        description="Interfaces by index",
    )

    def add_iface(self, iface: Interface) -> None:
        """Insert an interface, replacing any with the same index."""
        self.ifaces[iface.id] = iface

    def get_iface(self, iface_id: IfaceIndex) -> Interface:
        """Get interface by index.

        Raises:
            InterfaceNotFoundError: If the node has no such interface
        """
        try:
            return self.ifaces[iface_id]
        except KeyError:
            raise InterfaceNotFoundError(self.id, iface_id) from None

    def find_iface(self, if_type: InterfaceType) -> Interface | None:
        """First interface of the given type, in insertion order."""
        for iface in self.ifaces.values():
            if iface.if_type == if_type:
                return iface
        return None

    def local_net_ifaces(self) -> set[IfaceIndex]:
        """Indexes of all LocalNet interfaces on this node."""
        return {if_id for if_id, iface in self.ifaces.items() if iface.is_local_net}


class Topology(BaseModel):
    """Indexed topology.

    Mutated only while it is being built; every query and path search
    treats it as read-only.
    """

    nodes: dict[NodeId, TopologyNode] = Field(default_factory=dict, description="Nodes by id")

    @property
    def node_count(self) -> int:
        """Number of nodes in topology."""
        return len(self.nodes)

    @property
    def interface_count(self) -> int:
        """Number of interfaces across all nodes."""
        return sum(len(node.ifaces) for node in self.nodes.values())

    @property
    def link_count(self) -> int:
        """Number of declared (directional) neighbor links."""
        return sum(
            len(iface.neighbors)
            for node in self.nodes.values()
            for iface in node.ifaces.values()
        )

    def add_node(self, node: TopologyNode) -> None:
        """Insert a node, replacing any with the same id."""
        self.nodes[node.id] = node

    def get_node(self, node_id: NodeId) -> TopologyNode:
        """Get node by id.

        Raises:
            NodeNotFoundError: If the id is not in the topology
        """
        try:
            return self.nodes[node_id]
        except KeyError:
            raise NodeNotFoundError(node_id) from None

    def get_node_mut(self, node_id: NodeId) -> TopologyNode:
        """Get node by id for in-place changes during construction.

        Raises:
            NodeNotFoundError: If the id is not in the topology
        """
        return self.get_node(node_id)

    def get_neighbors(self, node_id: NodeId) -> set[NodeId]:
        """Ids of all nodes linked from any interface of a node."""
        node = self.get_node(node_id)
        return {
            link.node
            for iface in node.ifaces.values()
            for link in iface.neighbors
        }

    def find_internet_gateway(self) -> set[NodeId]:
        """Ids of nodes owning at least one Internet interface."""
        gateways: set[NodeId] = set()
        for node_id, node in self.nodes.items():
            if node.find_iface(InterfaceType.INTERNET) is not None:
                gateways.add(node_id)
        return gateways

    def get_adjacent_interface(
        self,
        from_node: NodeId,
        via_if: IfaceIndex,
        to_node: NodeId,
    ) -> IfaceIndex | None:
        """Neighbor-side interface of the link from ``via_if`` to ``to_node``.

        Only ``via_if`` is searched; other interfaces of ``from_node``
        are ignored.

        Raises:
            NodeNotFoundError: If ``from_node`` is unknown
            InterfaceNotFoundError: If ``via_if`` is not on ``from_node``
        """
        iface = self.get_node(from_node).get_iface(via_if)
        for link in iface.neighbors:
            if link.node == to_node:
                return link.iface
        return None

    def get_local_iface_id_type(
        self,
        node_id: NodeId,
        if_type: InterfaceType,
    ) -> IfaceIndex | None:
        """Index of the first interface of ``if_type`` on a node, if any."""
        iface = self.get_node(node_id).find_iface(if_type)
        return iface.id if iface is not None else None

    def get_local_app_iface_id(self, node_id: NodeId) -> IfaceIndex | None:
        return self.get_local_iface_id_type(node_id, InterfaceType.LOCAL_APP)

    def get_internet_iface_id(self, node_id: NodeId) -> IfaceIndex | None:
        return self.get_local_iface_id_type(node_id, InterfaceType.INTERNET)

    def find_path(
        self,
        start_id: NodeId,
        start_if: IfaceIndex,
        finish_id: NodeId,
        finish_if: IfaceIndex,
        mode: SearchMode | None = None,
    ) -> list[Path]:
        """Enumerate simple paths between two (node, interface) endpoints.

        Convenience wrapper around PathEnumerator; see there for the
        search semantics of each mode.
        """
        from ifroute.search.enumerator import PathEnumerator, SearchMode

        enumerator = PathEnumerator(self, mode or SearchMode.LITERAL)
        result = enumerator.find_paths(start_id, start_if, finish_id, finish_if)
        return list(result.paths)
