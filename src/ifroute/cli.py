"""ifroute CLI.

Command-line interface for interface-aware path discovery.
Uses Click for command parsing and Rich for output formatting.
"""

from pathlib import Path

import click
from dotenv import load_dotenv

# Load .env file if present
load_dotenv()
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from ifroute.config import IfRouteSettings, get_settings
from ifroute.errors import IfRouteError
from ifroute.log import setup_logging
from ifroute.model.loader import TopologyLoader, build_graph
from ifroute.model.topology import IfaceIndex, InterfaceType, NodeId, Topology
from ifroute.search.enumerator import PathEnumerator, SearchMode, find_internet_paths
from ifroute.viz import TopologyReport

console = Console()

topology_option = click.option(
    "--topology",
    "-t",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Topology file (defaults to IFROUTE_TOPOLOGY_FILE)",
)

mode_option = click.option(
    "--mode",
    "-m",
    type=click.Choice([m.value for m in SearchMode]),
    default=None,
    help="Enumeration mode (defaults to IFROUTE_SEARCH_MODE)",
)


def parse_int(value: str) -> int:
    """Parse a decimal or 0x-prefixed id."""
    try:
        return int(value, 0)
    except ValueError:
        raise click.BadParameter(f"not an integer id: {value}") from None


def parse_endpoint(value: str) -> tuple[NodeId, IfaceIndex | None]:
    """Parse ``NODE`` or ``NODE:IFACE``."""
    node, _, iface = value.partition(":")
    return NodeId(parse_int(node)), IfaceIndex(parse_int(iface)) if iface else None


def endpoint_callback(ctx: click.Context, param: click.Parameter, value: str):
    return parse_endpoint(value)


def resolve_iface(topo: Topology, node_id: NodeId, iface: IfaceIndex | None) -> IfaceIndex:
    """Use the explicit interface, else the node's LocalApp interface."""
    if iface is not None:
        topo.get_node(node_id).get_iface(iface)
        return iface
    app_if = topo.get_local_iface_id_type(node_id, InterfaceType.LOCAL_APP)
    if app_if is None:
        raise click.BadParameter(
            f"node {node_id:#x} has no local-app interface; use NODE:IFACE"
        )
    return app_if


def load(settings: IfRouteSettings, topology: Path | None) -> Topology:
    return TopologyLoader().load(topology or settings.topology_file)


def fail(e: IfRouteError) -> None:
    console.print(f"[bold red]Error:[/bold red] {escape(e.message)}")
    if e.details:
        console.print(f"[dim]Details: {escape(str(e.details))}[/dim]")
    raise SystemExit(1)


@click.group()
@click.version_option(package_name="ifroute")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None,
    help="Logging level (defaults to IFROUTE_LOG_LEVEL)",
)
@click.pass_context
def main(ctx: click.Context, log_level: str | None) -> None:
    """Interface-aware route discovery.

    Finds loop-free paths through multi-homed topologies and reports
    the interface used at every hop.
    """
    try:
        settings = get_settings()
    except IfRouteError as e:
        fail(e)
    setup_logging((log_level or settings.log_level).upper())
    ctx.obj = settings


@main.command("load-topology")
@click.argument("topology_file", type=click.Path(exists=True, path_type=Path))
def load_topology(topology_file: Path) -> None:
    """Load and validate a topology file.

    TOPOLOGY_FILE: Path to the topology YAML file
    """
    try:
        topo = TopologyLoader().load(topology_file)
        graph = build_graph(topo)

        TopologyReport(topo, console).show_topology(graph.number_of_edges())

        console.print(
            Panel(
                f"[bold green]{topo.node_count} nodes, "
                f"{topo.interface_count} interfaces, "
                f"{topo.link_count} links[/bold green]",
                title="Topology Loaded",
                border_style="green",
            )
        )

    except IfRouteError as e:
        fail(e)


@main.command("info")
def info() -> None:
    """Show version information."""
    from ifroute import __version__

    console.print(
        Panel(
            f"[bold]ifroute[/bold] v{__version__}\n\n"
            "Interface-aware multi-path discovery\n"
            "for multi-homed node topologies.",
            title="About",
            border_style="blue",
        )
    )


@main.command("gateways")
@topology_option
@click.pass_obj
def gateways(settings: IfRouteSettings, topology: Path | None) -> None:
    """List nodes owning an Internet interface."""
    try:
        topo = load(settings, topology)
        found = topo.find_internet_gateway()
        if not found:
            console.print("[yellow]No internet gateways[/yellow]")
            return
        TopologyReport(topo, console).show_gateways(found)

    except IfRouteError as e:
        fail(e)


@main.command("adjacent")
@click.argument("node")
@click.argument("iface")
@click.argument("neighbor")
@topology_option
@click.pass_obj
def adjacent(
    settings: IfRouteSettings,
    node: str,
    iface: str,
    neighbor: str,
    topology: Path | None,
) -> None:
    """Show the neighbor-side interface of a link.

    NODE IFACE: local end of the link. NEIGHBOR: remote node id.
    """
    try:
        topo = load(settings, topology)
        remote = topo.get_adjacent_interface(
            NodeId(parse_int(node)),
            IfaceIndex(parse_int(iface)),
            NodeId(parse_int(neighbor)),
        )
        console.print("none" if remote is None else str(remote))

    except IfRouteError as e:
        fail(e)


@main.command("find-path")
@click.option("--from", "origin", required=True, callback=endpoint_callback, help="NODE[:IFACE]")
@click.option("--to", "destination", required=True, callback=endpoint_callback, help="NODE[:IFACE]")
@mode_option
@topology_option
@click.pass_obj
def find_path(
    settings: IfRouteSettings,
    origin: tuple[NodeId, IfaceIndex | None],
    destination: tuple[NodeId, IfaceIndex | None],
    mode: str | None,
    topology: Path | None,
) -> None:
    """Enumerate loop-free paths between two endpoints.

    The interface of an endpoint defaults to the node's local-app interface.
    """
    try:
        topo = load(settings, topology)
        start_id, start_if = origin
        finish_id, finish_if = destination
        start_if = resolve_iface(topo, start_id, start_if)
        finish_if = resolve_iface(topo, finish_id, finish_if)

        enumerator = PathEnumerator(topo, SearchMode(mode or settings.search_mode))
        result = enumerator.find_paths(start_id, start_if, finish_id, finish_if)

        if not result.found:
            console.print(f"[yellow]No path from {start_id:#x} to {finish_id:#x}[/yellow]")
            raise SystemExit(1)

        TopologyReport(topo, console).show_paths(
            list(result.paths),
            title=f"Paths {start_id:#x} -> {finish_id:#x}",
        )

    except IfRouteError as e:
        fail(e)


@main.command("internet")
@click.argument("node")
@mode_option
@topology_option
@click.pass_obj
def internet(settings: IfRouteSettings, node: str, mode: str | None, topology: Path | None) -> None:
    """Enumerate paths from NODE's local-app interface to every gateway."""
    try:
        topo = load(settings, topology)
        node_id = NodeId(parse_int(node))
        routes = find_internet_paths(topo, node_id, SearchMode(mode or settings.search_mode))

        if not routes:
            console.print(f"[yellow]No gateway reachable from {node_id:#x}[/yellow]")
            raise SystemExit(1)

        report = TopologyReport(topo, console)
        for gateway in sorted(routes):
            report.show_paths(routes[gateway], title=f"Via gateway {gateway:#x}")

    except IfRouteError as e:
        fail(e)


if __name__ == "__main__":
    main()
