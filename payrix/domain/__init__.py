"""Domain layer: entity kinds, value objects, errors and record contracts."""
