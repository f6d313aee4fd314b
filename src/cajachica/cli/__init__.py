"""Command line interface for cajachica."""
