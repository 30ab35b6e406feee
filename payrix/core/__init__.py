"""Core layer: configuration, constants, results and base errors."""
