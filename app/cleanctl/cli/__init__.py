"""Command-line interface for cleanctl."""
