"""
Tactical Pathfinder CLI

Provides commands for:
- Baking navigation grids from minimap images
- Running path and ghost-teammate queries against baked grids
- Summarizing a baked grid
"""

import logging
from pathlib import Path
from typing import List, Optional, Tuple

import typer
from rich.console import Console
from rich.table import Table

from . import __version__
from .bake import bake_all
from .config import GRID_SIZE, load_settings
from .navgrid import DirectoryAssetSource, NavigationGridStore
from .route_export import write_route_json
from .tactical import TacticalPositionSolver

app = typer.Typer(
    name="tactical-pathfinder",
    help="Wall-aware paths and ghost-teammate positions on competitive map minimaps",
    add_completion=False,
)
console = Console()


def _solver(navgrid_dir: Optional[Path]) -> TacticalPositionSolver:
    settings = load_settings()
    root = navgrid_dir or settings.navgrid_dir
    store = NavigationGridStore()
    if root:
        store.init(DirectoryAssetSource(root))
    return TacticalPositionSolver(store)


def version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold blue]tactical-pathfinder[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
    version: bool = typer.Option(False, "--version", callback=version_callback, is_eager=True),
) -> None:
    level = "DEBUG" if verbose else load_settings().log_level
    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


@app.command()
def bake(
    out_dir: Path = typer.Argument(..., help="Directory for the baked grids"),
    maps: Optional[List[str]] = typer.Option(None, "--map", "-m", help="Map to bake (repeatable)"),
    grid_size: int = typer.Option(GRID_SIZE, help="Cells per side"),
    fmt: str = typer.Option("npy", "--format", help="npy or json"),
) -> None:
    """Download minimaps and bake walkability grids."""
    written = bake_all(out_dir, maps=maps, fmt=fmt, grid_size=grid_size)
    for name, path in written.items():
        console.print(f"[green]✓[/green] {name} -> {path}")
    if not written:
        console.print("[red]No grids were baked[/red]")
        raise typer.Exit(1)


@app.command()
def path(
    map_name: str = typer.Argument(...),
    start: Tuple[float, float] = typer.Option(..., "--start", help="World X Y"),
    end: Tuple[float, float] = typer.Option(..., "--end", help="World X Y"),
    navgrid_dir: Optional[Path] = typer.Option(None, "--navgrids"),
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="Write positions as JSON"),
) -> None:
    """Find a wall-aware path between two world positions."""
    solver = _solver(navgrid_dir)
    pts = solver.find_path(start, end, map_name)
    if pts is None:
        console.print(f"[red]Unknown map: {map_name}[/red]")
        raise typer.Exit(1)
    table = Table(title=f"Path on {map_name}")
    table.add_column("#", justify="right")
    table.add_column("x")
    table.add_column("y")
    for i, p in enumerate(pts):
        table.add_row(str(i), f"{p.x:.4f}", f"{p.y:.4f}")
    console.print(table)
    if out:
        write_route_json(pts, str(out), map_name=map_name)


@app.command()
def ghost(
    map_name: str = typer.Argument(...),
    death: Tuple[float, float] = typer.Option(..., "--death", help="World X Y"),
    teammate: Tuple[float, float] = typer.Option(..., "--teammate", help="World X Y"),
    trade_distance: float = typer.Option(2500.0, "--trade-distance", "-t"),
    navgrid_dir: Optional[Path] = typer.Option(None, "--navgrids"),
) -> None:
    """Where the teammate should have stood to trade this death."""
    solver = _solver(navgrid_dir)
    g = solver.find_optimal_ghost_position(death, teammate, trade_distance, map_name)
    if g is None:
        console.print("[yellow]No recommendation available[/yellow]")
        raise typer.Exit(1)
    rec = solver.validate_ghost(g, death, map_name)
    console.print(f"ghost (normalized): {g.x:.4f}, {g.y:.4f}")
    if rec is not None:
        note = " [yellow](adjusted into bounds)[/yellow]" if rec.was_adjusted else ""
        console.print(f"ghost (world): {rec.point.x:.1f}, {rec.point.y:.1f}{note}")


@app.command("grid-info")
def grid_info(
    map_name: str = typer.Argument(...),
    navgrid_dir: Optional[Path] = typer.Option(None, "--navgrids"),
) -> None:
    """Summarize a baked grid."""
    grid = _solver(navgrid_dir).store.get(map_name)
    if grid is None:
        console.print(f"[yellow]No nav grid for {map_name}[/yellow]")
        raise typer.Exit(1)
    walkable = int(grid.walkable.sum())
    total = grid.grid_size * grid.grid_size
    console.print(f"{grid.map_name}: {grid.grid_size}x{grid.grid_size}, "
                  f"walkable {100.0 * walkable / total:.1f}% ({walkable}/{total})")


if __name__ == "__main__":
    app()
