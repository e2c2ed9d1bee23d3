"""Command-line maintenance tools."""
