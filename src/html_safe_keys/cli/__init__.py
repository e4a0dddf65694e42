"""Command-line interface for html-safe-keys."""
