"""
Core scoring engine: indicator extraction, rule inference, medicine safety,
screening and guidance lookups. Every component is a pure function of its input.
"""
