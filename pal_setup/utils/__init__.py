"""
Utility functions module.

Fixed-point decimal handling and calendar date codecs shared by the
parsers, statistics and writers.

Numeric Semantics:
- Every price, tick size and statistic is a decimal.Decimal at a fixed scale
- Conversions from text or float round half-even to that scale, once
- Binary floating point never takes part in arithmetic
"""
