"""Command line interface for lunchctl."""
