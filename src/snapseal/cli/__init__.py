"""Command-line interface for snapseal."""
