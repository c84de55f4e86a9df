"""Depth-first enumeration of simple, interface-tagged paths.

The search walks every interface of the current node, follows each
neighbor link to a node not yet on the in-progress path, and records a
snapshot of the path whenever it reaches the destination node.

Two modes are supported:

- LITERAL: after a successful branch, a node stops exploring once its
  last untried LocalNet interface has produced a success. Remaining
  neighbors on that interface are skipped, so some simple paths through
  shared segments may not be reported.
- EXHAUSTIVE: never stops early and reports every simple path. Paths
  over parallel links with different interface tags are distinct.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from ifroute.errors import InterfaceNotFoundError
from ifroute.model.path import Path, PathNode
from ifroute.model.topology import IfaceIndex, Link, NodeId, Topology, TopologyNode

logger = logging.getLogger(__name__)


class SearchMode(str, Enum):
    """Path enumeration contract."""

    LITERAL = "literal"
    EXHAUSTIVE = "exhaustive"


@dataclass(frozen=True)
class PathSearchResult:
    """Outcome of one enumeration."""

    found: bool
    paths: tuple[Path, ...]

    @property
    def path_count(self) -> int:
        return len(self.paths)


@dataclass
class _Frame:
    """Search state of one node on the in-progress path."""

    unexplored: set[IfaceIndex]
    links: Iterator[tuple[IfaceIndex, Link]]
    any_success: bool = False


def _links(node: TopologyNode, unexplored: set[IfaceIndex]) -> Iterator[tuple[IfaceIndex, Link]]:
    """Yield (local interface, neighbor link) pairs of a node in order.

    Each interface leaves ``unexplored`` as soon as the walk reaches it,
    including interfaces without neighbors.
    """
    for iface in node.ifaces.values():
        unexplored.discard(iface.id)
        for neighbor in iface.neighbors:
            yield iface.id, neighbor


class PathEnumerator:
    """Enumerates loop-free paths between two (node, interface) endpoints.

    The topology is only read. The in-progress path and the list of
    completed paths are passed explicitly through the search.

    Example:
        enumerator = PathEnumerator(topology)
        result = enumerator.find_paths(NodeId(0xA), IfaceIndex(0), NodeId(0xC), IfaceIndex(0))
        for path in result.paths:
            print(path.path_string)
    """

    def __init__(self, topology: Topology, mode: SearchMode = SearchMode.LITERAL):
        self.topology = topology
        self.mode = SearchMode(mode)

    def find_paths(
        self,
        start_id: NodeId,
        start_if: IfaceIndex,
        finish_id: NodeId,
        finish_if: IfaceIndex,
    ) -> PathSearchResult:
        """Find paths from ``start_id`` (entered via ``start_if``) to
        ``finish_id`` (left via ``finish_if``).

        Raises:
            NodeNotFoundError: If either endpoint is not in the topology
        """
        # Fail fast on unknown endpoints before walking anything
        self.topology.get_node(start_id)
        self.topology.get_node(finish_id)

        logger.debug(
            "Searching paths %#x/%s -> %#x/%s (%s)",
            start_id, start_if, finish_id, finish_if, self.mode.value,
        )

        found: list[Path] = []
        success = self.search(start_id, start_if, finish_id, finish_if, [], found)

        logger.debug("Search finished: %d path(s)", len(found))
        return PathSearchResult(found=success, paths=tuple(found))

    def search(
        self,
        node_id: NodeId,
        entry_if: IfaceIndex,
        finish_id: NodeId,
        finish_if: IfaceIndex,
        path: list[PathNode],
        found: list[Path],
    ) -> bool:
        """Extend ``path`` from ``node_id`` until every branch is resolved.

        Appends a hop for ``node_id`` to ``path`` and leaves it there; the
        caller removes it. Completed paths are appended to ``found``.
        Deeper hops are tracked on an explicit stack of frames, so path
        length is not bounded by the interpreter's recursion limit.

        Returns:
            True if at least one path to the destination was recorded
            from this step.
        """
        on_path = {hop.id for hop in path}

        if self._push_hop(node_id, entry_if, finish_id, finish_if, path, on_path, found):
            return True

        stack = [self._frame(node_id)]
        # Outcome of the most recently finished child hop, None if none pending
        returned: bool | None = None

        while stack:
            frame = stack[-1]

            if returned is not None:
                on_path.discard(path.pop().id)
                if returned:
                    if not frame.unexplored and self.mode == SearchMode.LITERAL:
                        stack.pop()
                        continue
                    frame.any_success = True
                returned = None

            step = next(frame.links, None)
            if step is None:
                stack.pop()
                returned = frame.any_success
                continue

            if_id, neighbor = step
            if neighbor.node in on_path:
                continue

            path[-1] = path[-1].with_forward(if_id)
            if self._push_hop(
                neighbor.node, neighbor.iface, finish_id, finish_if, path, on_path, found
            ):
                returned = True
                continue
            stack.append(self._frame(neighbor.node))

        return bool(returned)

    def _push_hop(
        self,
        node_id: NodeId,
        entry_if: IfaceIndex,
        finish_id: NodeId,
        finish_if: IfaceIndex,
        path: list[PathNode],
        on_path: set[NodeId],
        found: list[Path],
    ) -> bool:
        """Append a hop; record a snapshot and return True at the destination."""
        path.append(PathNode(id=node_id, reverse=entry_if))
        on_path.add(node_id)
        if node_id != finish_id:
            return False
        path[-1] = path[-1].with_forward(finish_if)
        found.append(Path(nodes=tuple(path)))
        return True

    def _frame(self, node_id: NodeId) -> _Frame:
        node = self.topology.get_node(node_id)
        unexplored = node.local_net_ifaces()
        return _Frame(unexplored=unexplored, links=_links(node, unexplored))


def find_internet_paths(
    topology: Topology,
    node_id: NodeId,
    mode: SearchMode = SearchMode.LITERAL,
) -> dict[NodeId, list[Path]]:
    """Paths from a node's LocalApp interface to every Internet gateway.

    Returns:
        Discovered paths per gateway id; unreachable gateways are omitted.

    Raises:
        NodeNotFoundError: If ``node_id`` is not in the topology
        InterfaceNotFoundError: If the node has no LocalApp interface
    """
    app_if = topology.get_local_app_iface_id(node_id)
    if app_if is None:
        raise InterfaceNotFoundError(node_id)

    enumerator = PathEnumerator(topology, mode)
    routes: dict[NodeId, list[Path]] = {}

    for gateway in topology.find_internet_gateway():
        internet_if = topology.get_internet_iface_id(gateway)
        result = enumerator.find_paths(node_id, app_if, gateway, internet_if)
        if result.found:
            routes[gateway] = list(result.paths)

    logger.debug("Node %#x reaches %d gateway(s)", node_id, len(routes))
    return routes
