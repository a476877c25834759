"""Command-line presentation layer for ISS Flyover."""
