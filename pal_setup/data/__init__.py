"""
Data ingestion and time series module.

Handles vendor file formats, row validation, and the chronologically
ordered series the statistics are computed from.
"""
