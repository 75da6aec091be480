"""x402lint kernel: detection, normalization, rules and aggregation.

Pure functions over in-memory values. Public callers should use
x402lint.api rather than importing from here.
"""
