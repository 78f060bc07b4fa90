"""Top Earner - prior-year top earner transaction report."""

__version__ = "0.1.0"
