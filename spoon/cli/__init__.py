"""Command line interface for spoon."""
