"""maze2topo – reduce grid mazes to weighted topology graphs."""

__version__ = "0.1.0"
