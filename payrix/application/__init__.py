"""Application layer: workflows composed from transport operations."""
