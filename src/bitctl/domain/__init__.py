"""Domain layer: layout registry, codec, and presentation formatters.

Pure functions with no infrastructure dependencies.
"""
