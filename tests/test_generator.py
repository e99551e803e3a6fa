"""Tests for the DFS maze generator and braiding."""

import random

import pytest

from maze2topo.config import GeneratorConfig
from maze2topo.maze.generator import DFSMazeGenerator
from maze2topo.maze.grid import GridMaze


def _generate(**kwargs) -> GridMaze:
    return DFSMazeGenerator(GeneratorConfig(**kwargs)).generate()


class TestDFSMazeGenerator:
    @pytest.mark.parametrize("width,height", [(1, 5), (5, 1), (8, 6), (15, 15)])
    def test_perfect_maze_is_spanning_tree(self, width, height):
        maze = _generate(width=width, height=height, seed=3)
        assert maze.dimensions() == (width, height)
        assert maze.num_passages() == width * height - 1
        assert len(maze.find_connected_components()) == 1

    def test_same_seed_same_maze(self):
        assert _generate(width=12, height=9, seed=11) == _generate(width=12, height=9, seed=11)

    def test_different_seed_different_maze(self):
        assert _generate(width=12, height=9, seed=1) != _generate(width=12, height=9, seed=2)

    def test_default_config(self):
        maze = DFSMazeGenerator().generate()
        assert maze.dimensions() == (20, 20)


class TestBraid:
    def test_full_braid_removes_all_dead_ends(self):
        maze = _generate(width=10, height=10, seed=5)
        assert maze.find_dead_ends()
        braided = maze.braid(1.0, random.Random(0))
        assert braided.find_dead_ends() == []
        assert braided.num_passages() > maze.num_passages()
        assert len(braided.find_connected_components()) == 1

    def test_partial_braid_keeps_some_dead_ends(self):
        maze = _generate(width=20, height=20, seed=5)
        before = len(maze.find_dead_ends())
        after = len(maze.braid(0.3, random.Random(0)).find_dead_ends())
        assert 0 < after < before

    def test_braid_returns_new_maze(self):
        maze = _generate(width=6, height=6, seed=5)
        passages = maze.num_passages()
        maze.braid(1.0, random.Random(0))
        assert maze.num_passages() == passages

    def test_generator_applies_braid(self):
        perfect = _generate(width=10, height=10, seed=8)
        braided = _generate(width=10, height=10, seed=8, braid_probability=1.0)
        assert braided.find_dead_ends() == []
        assert braided.num_passages() > perfect.num_passages()
