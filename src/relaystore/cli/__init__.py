"""Command-line interface for relaystore."""
