"""Core traversal and transfer primitives."""
