"""Exception hierarchy for ifroute.

All exceptions inherit from IfRouteError for consistent handling.
Unknown node or interface ids are contract violations and surface as
NodeNotFoundError / InterfaceNotFoundError; expected "not found"
outcomes are returned as None or empty collections instead.
"""

from typing import Any


class IfRouteError(Exception):
    """Base exception for all ifroute errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# Topology Errors
class TopologyError(IfRouteError):
    """Base exception for topology-related errors."""


class TopologyLoadError(TopologyError):
    """Failed to load topology from file."""


class TopologyValidationError(TopologyError):
    """Topology data failed validation."""


class NodeNotFoundError(TopologyError):
    """Referenced node does not exist in topology."""

    def __init__(self, node_id: int) -> None:
        super().__init__(f"Node not found: {node_id:#x}", {"node": node_id})
        self.node_id = node_id


class InterfaceNotFoundError(TopologyError):
    """Referenced interface does not exist on its node."""

    def __init__(self, node_id: int, iface_id: int | None = None) -> None:
        if iface_id is None:
            message = f"No matching interface on node {node_id:#x}"
        else:
            message = f"Interface not found: {node_id:#x}/{iface_id}"
        super().__init__(message, {"node": node_id, "iface": iface_id})
        self.node_id = node_id
        self.iface_id = iface_id


# Configuration Errors
class ConfigError(IfRouteError):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Configuration failed validation."""
