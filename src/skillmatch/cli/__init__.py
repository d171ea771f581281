"""Command-line interface for skillmatch."""
