"""Invariant checks and statistics reports."""
