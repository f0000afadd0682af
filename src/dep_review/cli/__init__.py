"""Command line interface for dep-review."""
