"""Command-line interface and terminal applications."""
