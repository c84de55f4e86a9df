"""Console rendering for ifroute.

Tables for topology summaries and discovered paths.
"""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ifroute.model.path import Path
from ifroute.model.topology import InterfaceType, NodeId, Topology

TYPE_STYLES = {
    InterfaceType.LOCAL_APP: "cyan",
    InterfaceType.LOCAL_NET: "green",
    InterfaceType.INTERNET: "magenta",
}


class TopologyReport:
    """Renders topology contents and path results with Rich.

    Example:
        report = TopologyReport(topology)
        report.show_topology()
        report.show_paths(paths)
    """

    def __init__(self, topology: Topology, console: Console | None = None):
        self.topology = topology
        self.console = console or Console()

    def summary_table(self, graph_edges: int | None = None) -> Table:
        table = Table(title="Topology Summary", show_header=True, header_style="bold cyan")
        table.add_column("Metric", style="dim")
        table.add_column("Value", justify="right")

        table.add_row("Nodes", str(self.topology.node_count))
        table.add_row("Interfaces", str(self.topology.interface_count))
        table.add_row("Links", str(self.topology.link_count))
        table.add_row("Gateways", str(len(self.topology.find_internet_gateway())))
        if graph_edges is not None:
            table.add_row("Graph Edges", str(graph_edges))
        return table

    def node_table(self) -> Table:
        table = Table(title="Nodes", show_header=True, header_style="bold green")
        table.add_column("Node")
        table.add_column("Interface", justify="right")
        table.add_column("Type")
        table.add_column("Neighbors")
        table.add_column("Peers")

        for node_id, node in self.topology.nodes.items():
            if not node.ifaces:
                table.add_row(f"{node_id:#x}", "-", "-", "-", "-")
                continue
            peers = ", ".join(
                f"{peer:#x}" for peer in sorted(self.topology.get_neighbors(node_id))
            )
            for i, iface in enumerate(node.ifaces.values()):
                style = TYPE_STYLES[iface.if_type]
                neighbors = ", ".join(f"{link.node:#x}/{link.iface}" for link in iface.neighbors)
                table.add_row(
                    f"{node_id:#x}" if i == 0 else "",
                    str(iface.id),
                    f"[{style}]{iface.if_type.value}[/{style}]",
                    neighbors or "-",
                    (peers or "-") if i == 0 else "",
                )
        return table

    def show_topology(self, graph_edges: int | None = None) -> None:
        self.console.print(self.summary_table(graph_edges))
        self.console.print()
        self.console.print(self.node_table())
        self.console.print()

    def show_paths(self, paths: list[Path], title: str = "Paths") -> None:
        """Print one row per path: hop count and the reverse/node/forward chain."""
        table = Table(title=title, show_header=True, header_style="bold yellow")
        table.add_column("#", justify="right")
        table.add_column("Hops", justify="right")
        table.add_column("Route")

        for i, path in enumerate(paths, start=1):
            table.add_row(str(i), str(path.hop_count), path.path_string)

        self.console.print(table)
        self.console.print(
            Panel(
                f"[bold green]Paths found: {len(paths)}[/bold green]",
                border_style="green",
            )
        )

    def show_gateways(self, gateways: set[NodeId]) -> None:
        table = Table(title="Internet Gateways", show_header=True, header_style="bold magenta")
        table.add_column("Node")
        table.add_column("Internet Interface", justify="right")

        for node_id in sorted(gateways):
            table.add_row(f"{node_id:#x}", str(self.topology.get_internet_iface_id(node_id)))

        self.console.print(table)
