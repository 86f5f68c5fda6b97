"""
Result models module.

Immutable records of calibration outcomes handed from the statistics
engine to the output writers.
"""
