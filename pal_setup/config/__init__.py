"""
Configuration module.

Typed defaults, YAML instrument overrides and validation of the merged
configuration.
"""
