"""Job listing aggregation and social posting pipeline."""

__version__ = "0.1.0"
