"""Tests for the maze model: walled grid, thick maze and shared helpers."""

import numpy as np
import pytest

from maze2topo.maze.grid import NO_WALL, GridMaze, count_walls
from maze2topo.maze.model import (
    Direction,
    IllegalDimensionsError,
    MazeError,
    OutOfBoundsError,
    raster_key,
)
from maze2topo.maze.thick import ThickMaze


def _corridor() -> GridMaze:
    return GridMaze.from_passages(4, 1, [((0, 0), (1, 0)), ((1, 0), (2, 0)), ((2, 0), (3, 0))])


def _t_junction() -> GridMaze:
    return GridMaze.from_passages(3, 2, [((0, 0), (1, 0)), ((1, 0), (2, 0)), ((1, 0), (1, 1))])


class TestDirection:
    def test_flip(self):
        assert Direction.NORTH.flip() is Direction.SOUTH
        assert Direction.WEST.flip() is Direction.EAST

    def test_step_grows_south(self):
        assert Direction.SOUTH.step((2, 2)) == (2, 3)
        assert Direction.NORTH.step((2, 2)) == (2, 1)

    def test_between(self):
        assert Direction.between((1, 1), (2, 1)) is Direction.EAST
        with pytest.raises(ValueError):
            Direction.between((0, 0), (1, 1))

    def test_raster_key_sorts_rows_first(self):
        cells = [(1, 0), (0, 1), (0, 0)]
        assert sorted(cells, key=raster_key) == [(0, 0), (1, 0), (0, 1)]


class TestWallRanking:
    def test_count_walls(self):
        assert count_walls(3, 2) == 7
        assert count_walls(4, 1) == 3

    def test_rank_positions(self):
        maze = GridMaze(3, 2)
        assert maze.rank_position((0, 0), Direction.EAST) == 0
        assert maze.rank_position((1, 1), Direction.EAST) == 3
        assert maze.rank_position((2, 0), Direction.SOUTH) == 6
        assert maze.rank_position((1, 0), Direction.WEST) == 0
        assert maze.rank_position((1, 1), Direction.NORTH) == 5

    def test_boundary_walls_have_no_rank(self):
        maze = GridMaze(3, 2)
        assert maze.rank_position((2, 0), Direction.EAST) == NO_WALL
        assert maze.rank_position((0, 0), Direction.NORTH) == NO_WALL
        assert maze.rank_position((5, 5), Direction.SOUTH) == NO_WALL

    def test_unrank_is_inverse(self):
        maze = GridMaze(3, 2)
        for rank in range(count_walls(3, 2)):
            cell, direction = maze.unrank(rank)
            assert maze.rank_position(cell, direction) == rank
        assert maze.unrank(6) == ((2, 0), Direction.SOUTH)

    def test_unrank_out_of_range(self):
        with pytest.raises(ValueError):
            GridMaze(3, 2).unrank(7)

    def test_wrong_wall_count_rejected(self):
        with pytest.raises(ValueError):
            GridMaze(3, 2, np.ones(5, dtype=bool))


class TestGridMaze:
    def test_illegal_dimensions(self):
        with pytest.raises(IllegalDimensionsError):
            GridMaze(0, 3)
        assert issubclass(IllegalDimensionsError, MazeError)

    def test_fully_walled_cell_is_out_of_bounds(self):
        maze = _t_junction()
        assert not maze.cell_in_bounds((0, 1))
        assert not maze.cell_in_bounds((2, 1))
        assert maze.cell_in_bounds((1, 1))
        assert list(maze.cells()) == [(0, 0), (1, 0), (2, 0), (1, 1)]
        assert maze.find_invalid_cells() == [(0, 1), (2, 1)]

    def test_neighbours_ordered_nesw(self):
        maze = _t_junction()
        assert maze.neighbours((1, 0)) == [(2, 0), (1, 1), (0, 0)]
        assert maze.neighbours((9, 9)) == []

    def test_dead_ends_and_junctions(self):
        maze = _t_junction()
        assert maze.find_dead_ends() == [(0, 0), (2, 0), (1, 1)]
        assert maze.find_junctions() == [(1, 0)]
        assert maze.num_passages() == 3

    def test_walls_array_is_read_only(self):
        maze = GridMaze.empty(2, 2)
        with pytest.raises(ValueError):
            maze.walls[0] = True

    def test_carve_returns_new_maze(self):
        maze = GridMaze(2, 1)
        carved = maze.carve((0, 0), Direction.EAST)
        assert maze.num_passages() == 0
        assert carved.neighbours((0, 0)) == [(1, 0)]

    def test_carving_boundary_rejected(self):
        with pytest.raises(ValueError):
            GridMaze(2, 2).carve((0, 0), Direction.NORTH)

    def test_equality_and_hash(self):
        assert _corridor() == GridMaze.empty(4, 1)
        assert hash(_corridor()) == hash(GridMaze.empty(4, 1))
        assert _corridor() != GridMaze(4, 1)

    def test_bfs_levels(self):
        result = _corridor().perform_bfs_from((0, 0))
        assert result.connected_cells == [(0, 0), (1, 0), (2, 0), (3, 0)]
        assert result.eccentricity == 3
        assert result.distance_to((3, 0)) == 3
        assert result.distance_to((9, 9)) is None

    def test_bfs_from_out_of_bounds_cell(self):
        with pytest.raises(OutOfBoundsError):
            _t_junction().perform_bfs_from((0, 1))

    def test_connected_components(self):
        maze = GridMaze.from_passages(4, 1, [((0, 0), (1, 0)), ((2, 0), (3, 0))])
        assert maze.find_connected_components() == [[(0, 0), (1, 0)], [(2, 0), (3, 0)]]

    def test_to_networkx(self):
        g = _t_junction().to_networkx()
        assert list(g.nodes) == [(0, 0), (1, 0), (2, 0), (1, 1)]
        assert g.number_of_edges() == 3


class TestThickMaze:
    def test_from_rows(self):
        maze = ThickMaze.from_rows(["###", "#.#", "#.#", "###"])
        assert maze.dimensions() == (3, 4)
        assert list(maze.cells()) == [(1, 1), (1, 2)]
        assert maze.neighbours((1, 1)) == [(1, 2)]
        assert maze.neighbours((0, 0)) == []
        assert maze.num_cell_walls((1, 2)) == 3

    def test_to_rows_round_trips(self):
        rows = ["#####", "#...#", "#.#.#", "#####"]
        assert ThickMaze.from_rows(rows).to_rows() == rows

    def test_grid_to_thick(self):
        thick = _corridor().to_thick()
        assert thick.to_rows() == ["#########", "#.......#", "#########"]

    def test_open_grid_to_thick(self):
        thick = GridMaze.empty(2, 2).to_thick()
        assert thick.to_rows() == ["#####", "#...#", "#...#", "#...#", "#####"]

    def test_thick_preserves_dead_ends(self):
        thick = _t_junction().to_thick()
        assert len(thick.find_dead_ends()) == 3
        assert len(thick.find_junctions()) == 1
