"""Room detection and topological reduction."""
