"""Grid maze representations, generation and loading."""
