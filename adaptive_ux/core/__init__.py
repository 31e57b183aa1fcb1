"""Core primitives shared across the adaptation pipeline."""
