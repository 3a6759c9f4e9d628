"""Command-line interface for stlview."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from stlview import __version__
from stlview.core import Config, StlViewError, bounding_radius, camera_distance
from stlview.processing import MeshLoader
from stlview.utils import setup_logging

app = typer.Typer(
    name="stlview",
    help="Decode and inspect ASCII and binary STL files",
    add_completion=False,
)
console = Console()


@app.command()
def inspect(
    stl_file: Path = typer.Argument(
        ...,
        help="Path to STL file to inspect",
    ),
    detailed: bool = typer.Option(
        False,
        "--detailed",
        "-d",
        help="Show surface statistics",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file",
    ),
) -> None:
    """Load an STL file and display its name, size and framing radius."""
    try:
        cfg = Config.from_toml(config) if config else Config()
        setup_logging(cfg.logging)

        mesh = MeshLoader(cfg.loader).load(stl_file)
    except (StlViewError, FileNotFoundError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]", soft_wrap=True)
        raise typer.Exit(1)

    console.print(
        f"Read mesh named: {escape(mesh.name)} with {mesh.triangle_count} tris", soft_wrap=True
    )

    table = Table(title="Mesh Information", show_header=False)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("File", str(stl_file))
    table.add_row("Name", mesh.name)
    table.add_row("Triangles", f"{mesh.triangle_count:,}")
    table.add_row("Bounding Radius", f"{bounding_radius(mesh):.4f}")
    table.add_row(
        "Camera Distance",
        f"{camera_distance(mesh, cfg.view.camera_distance_factor):.4f}",
    )

    if detailed and mesh.triangle_count > 0:
        surface = mesh.to_trimesh()
        bounds_min, bounds_max = surface.bounds
        table.add_row("Surface Area", f"{surface.area:.4f}")
        table.add_row(
            "Bounding Box",
            f"[{bounds_min[0]:.2f}, {bounds_min[1]:.2f}, {bounds_min[2]:.2f}] to "
            f"[{bounds_max[0]:.2f}, {bounds_max[1]:.2f}, {bounds_max[2]:.2f}]",
        )
        table.add_row("Watertight", "yes" if surface.is_watertight else "no")

    console.print(table)


@app.command("init-config")
def init_config(
    path: Path = typer.Argument(
        ...,
        help="Where to write the configuration file",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Overwrite an existing file",
    ),
) -> None:
    """Write the default configuration as TOML."""
    if path.exists() and not force:
        console.print(f"[red]Error: {path} already exists (use --force)[/red]")
        raise typer.Exit(1)

    Config().save_toml(path)
    console.print(f"[green]Wrote default configuration to {path}[/green]")


@app.command()
def info() -> None:
    """Display information about stlview."""
    console.print("\n[cyan]stlview[/cyan] - STL mesh decoder")
    console.print(f"Version: {__version__}")
    console.print("\nSupported formats:")
    console.print("  • ASCII STL (files starting with 'solid')")
    console.print("  • Binary STL (80 byte header, little-endian records)")


def main() -> None:
    """Main entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
