"""Validation checks for room partitions and reduced graphs."""

from __future__ import annotations

from maze2topo.maze.base import AbstractMaze
from maze2topo.maze.model import Cell
from maze2topo.topology.graph import WeightedTopologyGraph
from maze2topo.topology.model import NO_ROOM, RoomPartition, VertexKind
from maze2topo.topology.rooms import block_cells, block_is_open

MIN_ROOM_SIZE = 4


def validate_partition(maze: AbstractMaze, rooms: RoomPartition) -> list[str]:
    """Return a list of partition-level validation errors."""
    errors: list[str] = []

    if (rooms.width, rooms.height) != maze.dimensions():
        errors.append(
            f"Partition is {rooms.width}x{rooms.height} but the maze is {maze.width}x{maze.height}."
        )
        return errors

    # Dense numbering
    ids = sorted(rooms.room_contents)
    if ids != list(range(len(ids))):
        errors.append(f"Room ids are not dense 0..{len(ids) - 1}: {ids}")

    # Contents -> lookup
    for rid, cells in rooms.room_contents.items():
        if len(cells) < MIN_ROOM_SIZE:
            errors.append(f"Room {rid} has {len(cells)} cells (< {MIN_ROOM_SIZE}).")
        for c in cells:
            if not maze.cell_in_bounds(c):
                errors.append(f"Room {rid} contains out-of-bounds cell {c}.")
            elif rooms.room_of(c) != rid:
                errors.append(f"Cell {c} is listed in room {rid} but maps to {rooms.room_of(c)}.")

    # Lookup -> contents
    for y in range(maze.height):
        for x in range(maze.width):
            rid = int(rooms.cell_to_room[x, y])
            if rid == NO_ROOM:
                continue
            if not maze.cell_in_bounds((x, y)):
                errors.append(f"Out-of-bounds cell {(x, y)} is assigned to room {rid}.")
            elif (x, y) not in rooms.room_contents.get(rid, ()):
                errors.append(f"Cell {(x, y)} maps to room {rid} but is not in its contents.")

    # Fixed point: no open block may straddle rooms
    for y in range(maze.height - 1):
        for x in range(maze.width - 1):
            block = block_cells(x, y)
            if not block_is_open(maze, block):
                continue
            found = {rooms.room_of(c) for c in block}
            if len(found) > 1 or None in found:
                errors.append(f"Open block at {(x, y)} spans rooms {sorted(found, key=str)}.")

    return errors


def validate_reduction(
    maze: AbstractMaze,
    rooms: RoomPartition,
    graph: WeightedTopologyGraph,
) -> list[str]:
    """Return a list of graph-level validation errors."""
    errors: list[str] = []

    for vertex in graph.vertices:
        if not maze.cell_in_bounds(vertex.cell):
            errors.append(f"Vertex {vertex.vertex_id} sits on out-of-bounds cell {vertex.cell}.")
        if vertex.kind is VertexKind.ROOM_ENTRANCE and rooms.room_of(vertex.cell) != vertex.room_id:
            errors.append(
                f"Entrance vertex {vertex.vertex_id} claims room {vertex.room_id} "
                f"but its cell belongs to {rooms.room_of(vertex.cell)}."
            )

    for edge in graph.edges:
        label = f"Edge {edge.u}-{edge.v}"
        if edge.weight != len(edge.path) - 1:
            errors.append(f"{label} has weight {edge.weight} for a path of {len(edge.path)} cells.")
        # Anchored loops list their component in BFS order, not as a walk.
        if edge.is_loop and graph.get_vertex(edge.u).kind is VertexKind.LOOP_ANCHOR:
            continue
        if edge.path[0] != graph.get_vertex(edge.u).cell or edge.path[-1] != graph.get_vertex(edge.v).cell:
            errors.append(f"{label} path does not run between its vertex cells.")
        for a, b in zip(edge.path, edge.path[1:]):
            if b not in maze.neighbours(a):
                errors.append(f"{label} steps from {a} to {b} through a wall.")
                break

    return errors


def uncovered_cells(
    maze: AbstractMaze,
    rooms: RoomPartition,
    graph: WeightedTopologyGraph,
) -> list[Cell]:
    """In-bounds cells that no room, vertex or edge path accounts for.

    Only a corridor discarded in favour of a lighter one between the same
    vertices leaves cells uncovered.  That includes a second cycle through
    a vertex that already has a lighter self-loop.
    """
    covered: set[Cell] = set(rooms.room_cells())
    covered.update(graph.cell_to_vertex)
    for edge in graph.edges:
        covered.update(edge.path)
    return [c for c in maze.cells() if c not in covered]
