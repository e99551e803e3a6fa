"""Command-line interface for maze2topo.

Usage
-----
    maze2topo --input maze.txt --output report.json
    maze2topo --width 30 --height 30 --seed 7 --braid 0.5
    maze2topo --input cave.txt --no-rooms --debug /tmp/debug/
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from maze2topo.config import Config
from maze2topo.maze.generator import DFSMazeGenerator
from maze2topo.maze.loader import MazeLoader
from maze2topo.topology.model import RoomPartition
from maze2topo.topology.reducer import TopologyReducer
from maze2topo.topology.rooms import RoomFinder
from maze2topo.validate.checks import uncovered_cells, validate_partition, validate_reduction
from maze2topo.validate.reports import build_reduction_report, build_statistics, save_report

logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s %(name)s: %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger("maze2topo.cli")


@click.command()
@click.option("--input", "-i", "input_path", default=None, help="Maze text file (walled or thick format); generated if omitted")
@click.option("--output", "-o", "output_path", default="report.json", show_default=True, help="Output report JSON path")
@click.option("--config", "-c", "config_path", default=None, help="YAML configuration file")
@click.option("--width", default=None, type=int, help="Generated maze width")
@click.option("--height", default=None, type=int, help="Generated maze height")
@click.option("--seed", default=None, type=int, help="Random seed for reproducibility")
@click.option("--braid", "braid_probability", default=None, type=click.FloatRange(0.0, 1.0), help="Probability of removing each dead end")
@click.option("--no-rooms", is_flag=True, help="Skip room detection")
@click.option("--debug", "debug_dir", default=None, help="Directory for debug outputs (rooms.json, graph.json)")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def main(
    input_path: Optional[str],
    output_path: str,
    config_path: Optional[str],
    width: Optional[int],
    height: Optional[int],
    seed: Optional[int],
    braid_probability: Optional[float],
    no_rooms: bool,
    debug_dir: Optional[str],
    verbose: bool,
) -> None:
    """Reduce a grid maze to its weighted topology graph."""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    # ---- Configuration ------------------------------------------------ #
    if config_path:
        cfg = Config.from_yaml(config_path)
    else:
        cfg = Config.default()
    if width is not None:
        cfg.generator.width = width
    if height is not None:
        cfg.generator.height = height
    if seed is not None:
        cfg.generator.seed = seed
    if braid_probability is not None:
        cfg.generator.braid_probability = braid_probability
    if no_rooms:
        cfg.reduction.detect_rooms = False
    if debug_dir:
        cfg.debug_output_dir = Path(debug_dir)
    if cfg.debug_output_dir:
        cfg.debug_output_dir.mkdir(parents=True, exist_ok=True)

    # ---- Maze --------------------------------------------------------- #
    if input_path:
        logger.info("Loading maze from %s", input_path)
        maze = MazeLoader(input_path).load()
    else:
        gen = cfg.generator
        logger.info("Generating %dx%d maze (seed=%d, braid=%.2f)", gen.width, gen.height, gen.seed, gen.braid_probability)
        maze = DFSMazeGenerator(gen).generate()

    # ---- Rooms -------------------------------------------------------- #
    partition_errors: list[str] = []
    if cfg.reduction.detect_rooms:
        rooms = RoomFinder().find(maze)
        if cfg.reduction.verify:
            partition_errors = validate_partition(maze, rooms)
        if partition_errors:
            for e in partition_errors:
                logger.error("Partition error: %s", e)
            raise SystemExit(1)
    else:
        rooms = RoomPartition.empty(maze)

    # ---- Reduction ---------------------------------------------------- #
    graph = TopologyReducer(cfg.reduction).build(maze, rooms)

    reduction_errors: list[str] = []
    uncovered = []
    if cfg.reduction.verify:
        reduction_errors = validate_reduction(maze, rooms, graph)
        uncovered = uncovered_cells(maze, rooms, graph)
        for c in uncovered:
            logger.warning("Cell %s lies on a corridor discarded for a lighter one", c)

    stats = build_statistics(maze, rooms, graph)
    report = build_reduction_report(partition_errors, reduction_errors, stats, uncovered)
    report["graph"] = graph.to_dict()
    save_report(report, Path(output_path))
    logger.info("Report written to %s", output_path)

    if cfg.debug_output_dir:
        save_report(rooms.to_dict(), cfg.debug_output_dir / "rooms.json")
        save_report(graph.to_dict(), cfg.debug_output_dir / "graph.json")
        logger.info("Debug outputs saved to %s", cfg.debug_output_dir)

    if reduction_errors:
        for e in reduction_errors:
            logger.error("Reduction error: %s", e)
        raise SystemExit(1)


if __name__ == "__main__":
    main()
