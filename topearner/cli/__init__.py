"""Top Earner command-line interface."""
