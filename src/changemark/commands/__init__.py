"""Command implementations for the Changemark CLI."""
