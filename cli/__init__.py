"""Command line interface for SigmaNet."""
