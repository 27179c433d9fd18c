"""
Generation Settings Registry Module.

Per-product review generation settings: rating distribution, rating range,
daily limits, and JSON persistence.
"""
