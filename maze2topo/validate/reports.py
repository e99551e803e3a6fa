"""Maze statistics and reduction reporting."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

from maze2topo.maze.base import AbstractMaze
from maze2topo.maze.model import Cell
from maze2topo.topology.graph import WeightedTopologyGraph
from maze2topo.topology.model import RoomPartition, VertexKind


def build_statistics(
    maze: AbstractMaze,
    rooms: RoomPartition,
    graph: WeightedTopologyGraph,
) -> dict[str, Any]:
    """Summarise the decision structure of a reduced maze."""
    junctions = graph.vertices_of_kind(VertexKind.JUNCTION)
    passages = [e for e in graph.edges if not e.is_loop and e.room_id is None]
    lengths = sorted(e.weight for e in passages)
    return {
        "width": maze.width,
        "height": maze.height,
        "cells": sum(1 for _ in maze.cells()),
        "rooms": {
            "count": len(rooms),
            "sizes": [len(cells) for cells in rooms.room_contents.values()],
        },
        "vertices": {kind.value: len(graph.vertices_of_kind(kind)) for kind in VertexKind},
        "dead_ends": len(graph.vertices_of_kind(VertexKind.DEAD_END)),
        "t_junctions": sum(1 for v in junctions if maze.degree(v.cell) == 3),
        "cross_junctions": sum(1 for v in junctions if maze.degree(v.cell) == 4),
        "passages": {
            "count": len(passages),
            "lengths": lengths,
            "mean_length": round(sum(lengths) / len(lengths), 4) if lengths else 0.0,
        },
        "loops": sum(1 for e in graph.edges if e.is_loop),
        "total_weight": sum(e.weight for e in graph.edges),
    }


def build_reduction_report(
    partition_errors: list[str],
    reduction_errors: list[str],
    statistics: Optional[dict[str, Any]] = None,
    uncovered: Optional[list[Cell]] = None,
) -> dict[str, Any]:
    """Build a serialisable report dict."""
    return {
        "partition_errors": partition_errors,
        "reduction_errors": reduction_errors,
        "uncovered_cells": [list(c) for c in uncovered or []],
        "statistics": statistics or {},
        "ok": len(partition_errors) == 0 and len(reduction_errors) == 0,
    }


def save_report(report: dict[str, Any], path: Path) -> None:
    path.write_text(json.dumps(report, indent=2, ensure_ascii=False), encoding="utf-8")
