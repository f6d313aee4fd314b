"""HTTP API for cajachica."""
