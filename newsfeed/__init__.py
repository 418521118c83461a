"""Aggregation proxy in front of the NewsAPI headline and search endpoints."""

__version__ = "0.1.0"
