"""Command line interface for tsdocgen."""
