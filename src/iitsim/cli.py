"""CLI entry point for the IIT Simulator."""

import dataclasses
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .core.config import SimulatorConfig, get_config
from .core.exceptions import SimulatorError
from .topology.architecture import Architecture
from .topology.generator import SystemComplex, TopologyGenerator
from .topology.phi import PhiBand, classify_phi

console = Console()

ARCHITECTURES = [a.value for a in Architecture]

BAND_STYLES = {
    PhiBand.HIGH: "green",
    PhiBand.MEDIUM: "dark_orange",
    PhiBand.LOW: "red",
}


def print_error(message: str) -> None:
    """Print error message in red."""
    console.print(f"[red]Error:[/red] {message}")


def print_success(message: str) -> None:
    """Print success message in green."""
    console.print(f"[green]✓[/green] {message}")


def _make_generator(
    config: SimulatorConfig,
    columns: int | None = None,
    seed: int | None = None,
) -> TopologyGenerator:
    grid = config.grid
    if columns is not None:
        grid = dataclasses.replace(grid, columns=columns)
    return TopologyGenerator.from_config(dataclasses.replace(config, grid=grid), seed=seed)


def _phi_band(config: SimulatorConfig, phi: float) -> PhiBand:
    return classify_phi(phi, high=config.phi.high_threshold, medium=config.phi.medium_threshold)


def _format_phi(config: SimulatorConfig, phi: float) -> str:
    style = BAND_STYLES[_phi_band(config, phi)]
    return f"[bold {style}]{phi:.1f}[/bold {style}]"


def _system_panel(
    config: SimulatorConfig,
    system: SystemComplex,
    language_module: bool,
    self_model: bool,
) -> Panel:
    lines = [
        f"[bold]Architecture:[/bold] {system.architecture.display_name}",
        f"[bold]Integrated Information (Φ):[/bold] {_format_phi(config, system.phi)} "
        "[dim](conceptual value)[/dim]",
        f"[bold]Elements:[/bold] {len(system.elements)}",
        f"[bold]Connections:[/bold] {len(system.edges())}",
        "",
        f"[dim]{system.architecture.description}[/dim]",
    ]

    modules = []
    if language_module:
        modules.append("Language Module")
    if self_model:
        modules.append("Self-Model Module")
    if modules:
        lines.append("")
        lines.append(f"[magenta]Insulated modules:[/magenta] {', '.join(modules)} (no effect on Φ)")

    return Panel("\n".join(lines), title="System Properties")


def _neighbor_table(system: SystemComplex) -> Table:
    graph = system.graph
    table = Table(title="Connectivity")
    table.add_column("Element", style="cyan", justify="right")
    table.add_column("Position", style="green")
    table.add_column("Degree", style="yellow", justify="right")
    table.add_column("Neighbors", style="magenta")

    for i, element in enumerate(system.elements):
        neighbors = [str(graph.index_of(n)) for n in graph.neighbors(element.id)]
        x, y = element.position
        table.add_row(
            str(i),
            f"({x:g}, {y:g})",
            str(len(neighbors)),
            ", ".join(neighbors) or "-",
        )
    return table


@click.group()
@click.version_option(version=__version__, prog_name="iitsim")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """IIT Simulator - explore how system architecture shapes integrated information."""
    ctx.ensure_object(dict)
    try:
        config = get_config()
    except SimulatorError as e:
        print_error(str(e))
        sys.exit(1)
    config.verbose = config.verbose or verbose
    logging.basicConfig(
        level=logging.DEBUG if config.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj["config"] = config


@main.command()
@click.argument("architecture", type=click.Choice(ARCHITECTURES, case_sensitive=False))
@click.option("--elements", "-n", type=int, help="Number of elements (default: from config)")
@click.option("--columns", type=int, help="Grid width used for layout")
@click.option("--seed", type=int, help="Random seed for the random architecture")
@click.option("--language-module", is_flag=True, help="Show the insulated language module")
@click.option("--self-model", is_flag=True, help="Show the insulated self-model module")
@click.option("--output", "-o", type=click.Path(), help="Output file (JSON)")
@click.pass_context
def show(
    ctx: click.Context,
    architecture: str,
    elements: int | None,
    columns: int | None,
    seed: int | None,
    language_module: bool,
    self_model: bool,
    output: str | None,
) -> None:
    """Generate a system and display its properties."""
    from .output import export_json

    config: SimulatorConfig = ctx.obj["config"]

    try:
        system = _make_generator(config, columns, seed).generate(architecture, elements)
        panel = _system_panel(config, system, language_module, self_model)
        band = _phi_band(config, system.phi)
    except SimulatorError as e:
        print_error(str(e))
        sys.exit(1)

    console.print(panel)
    console.print(_neighbor_table(system))

    if output:
        data = system.to_dict()
        data["phi_band"] = band.value
        data["has_language_module"] = language_module
        data["has_self_model"] = self_model
        export_json(data, output)
        print_success(f"System saved to {output}")


@main.command()
@click.option("--elements", "-n", type=int, help="Number of elements (default: from config)")
@click.option("--seed", type=int, help="Random seed for the random architecture")
@click.option("--output", "-o", type=click.Path(), help="Output file (JSON)")
@click.pass_context
def compare(
    ctx: click.Context,
    elements: int | None,
    seed: int | None,
    output: str | None,
) -> None:
    """Compare Φ and structure across all architectures."""
    from .output import export_json
    from .topology.metrics import calculate_metrics

    config: SimulatorConfig = ctx.obj["config"]

    table = Table(title="Architecture Comparison")
    table.add_column("Architecture", style="cyan")
    table.add_column("Φ", justify="right")
    table.add_column("Band")
    table.add_column("Edges", justify="right")
    table.add_column("Density", justify="right")
    table.add_column("Components", justify="right")
    table.add_column("Clustering", justify="right")
    table.add_column("Efficiency", justify="right")

    results = []
    try:
        generator = _make_generator(config, seed=seed)
        for arch in Architecture:
            system = generator.generate(arch, elements)
            metrics = calculate_metrics(system)
            band = _phi_band(config, system.phi)
            table.add_row(
                arch.display_name,
                _format_phi(config, system.phi),
                band.value,
                str(metrics.edge_count),
                f"{metrics.density:.3f}",
                str(metrics.connected_components),
                f"{metrics.clustering_coefficient:.3f}",
                f"{metrics.global_efficiency:.3f}",
            )
            results.append(
                {
                    "architecture": arch.value,
                    "phi": system.phi,
                    "phi_band": band.value,
                    "metrics": metrics.to_dict(),
                }
            )
    except SimulatorError as e:
        print_error(str(e))
        sys.exit(1)

    console.print(table)

    if output:
        export_json({"architectures": results}, output)
        print_success(f"Comparison saved to {output}")


@main.command()
@click.argument("architecture", type=click.Choice(ARCHITECTURES, case_sensitive=False))
@click.option("--output", "-o", type=click.Path(), help="Output image file (PNG)")
@click.option("--show", "show_plot", is_flag=True, help="Display graph interactively")
@click.option("--elements", "-n", type=int, help="Number of elements (default: from config)")
@click.option("--seed", type=int, help="Random seed for the random architecture")
@click.option("--language-module", is_flag=True, help="Draw the insulated language module")
@click.option("--self-model", is_flag=True, help="Draw the insulated self-model module")
@click.pass_context
def render(
    ctx: click.Context,
    architecture: str,
    output: str | None,
    show_plot: bool,
    elements: int | None,
    seed: int | None,
    language_module: bool,
    self_model: bool,
) -> None:
    """Render a system as an image."""
    from .topology.visualizer import visualize_complex

    config: SimulatorConfig = ctx.obj["config"]

    if not output and not show_plot:
        print_error("Nothing to do: pass --output and/or --show.")
        sys.exit(1)

    try:
        system = _make_generator(config, seed=seed).generate(architecture, elements)
        visualize_complex(
            system,
            output_file=output,
            show=show_plot,
            language_module=language_module,
            self_model=self_model,
        )
    except SimulatorError as e:
        print_error(str(e))
        sys.exit(1)

    if output:
        print_success(f"System rendered to {output}")


@main.command()
@click.argument("architecture", type=click.Choice(ARCHITECTURES, case_sensitive=False))
@click.option("--output", "-o", type=click.Path(), required=True, help="Output file")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "graphml"]),
    default="json",
    help="Export format",
)
@click.option("--elements", "-n", type=int, help="Number of elements (default: from config)")
@click.option("--seed", type=int, help="Random seed for the random architecture")
@click.pass_context
def export(
    ctx: click.Context,
    architecture: str,
    output: str,
    output_format: str,
    elements: int | None,
    seed: int | None,
) -> None:
    """Export a generated system to JSON or GraphML."""
    from .output import export_graphml, export_json

    config: SimulatorConfig = ctx.obj["config"]

    try:
        system = _make_generator(config, seed=seed).generate(architecture, elements)
    except SimulatorError as e:
        print_error(str(e))
        sys.exit(1)

    if output_format == "graphml":
        export_graphml(system, output)
    else:
        export_json(system, output)
    print_success(f"System exported to {output}")


@main.command("config")
@click.option("--save", "save_path", type=click.Path(), help="Write the effective config to a file")
@click.pass_context
def show_config(ctx: click.Context, save_path: str | None) -> None:
    """Show the effective configuration."""
    import json

    config: SimulatorConfig = ctx.obj["config"]

    if save_path:
        config.save(Path(save_path))
        print_success(f"Configuration saved to {save_path}")
        return

    console.print_json(json.dumps(config.to_dict()))


if __name__ == "__main__":
    main()
