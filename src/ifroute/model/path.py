"""Path result models.

A Path is an ordered, loop-free sequence of hops from origin to
destination. Every hop records the interface the path entered through
("reverse") and the interface it left through ("forward").
"""

from pydantic import BaseModel, ConfigDict, Field

from ifroute.model.topology import IfaceIndex, NodeId

HOP_SEPARATOR = " -> "


class PathNode(BaseModel):
    """One hop of a path.

    On the first hop ``reverse`` is the caller's origin interface; on the
    last hop ``forward`` is the caller's destination interface.
    ``forward`` is unset only while a search is still extending the path.
    """

    model_config = ConfigDict(frozen=True)

    id: NodeId = Field(..., description="Node at this hop")
    reverse: IfaceIndex = Field(..., description="Interface the path entered through")
    forward: IfaceIndex | None = Field(default=None, description="Interface the path left through")

    def with_forward(self, forward: IfaceIndex) -> "PathNode":
        """Copy of this hop leaving through ``forward``."""
        return self.model_copy(update={"forward": forward})

    def __str__(self) -> str:
        forward = "-" if self.forward is None else str(self.forward)
        return f"{self.reverse}/{self.id:#x}/{forward}"


class Path(BaseModel):
    """Immutable hop sequence, origin first."""

    model_config = ConfigDict(frozen=True)

    nodes: tuple[PathNode, ...] = Field(..., min_length=1, description="Hops, origin to destination")

    @property
    def node_ids(self) -> tuple[NodeId, ...]:
        """Node sequence without interface tags."""
        return tuple(hop.id for hop in self.nodes)

    @property
    def origin(self) -> PathNode:
        return self.nodes[0]

    @property
    def destination(self) -> PathNode:
        return self.nodes[-1]

    @property
    def hop_count(self) -> int:
        """Number of links traversed."""
        return len(self.nodes) - 1

    @property
    def path_string(self) -> str:
        """Human-readable hop chain, e.g. ``0/0xa/1 -> 1/0xb/0``."""
        return HOP_SEPARATOR.join(str(hop) for hop in self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def __str__(self) -> str:
        return self.path_string
