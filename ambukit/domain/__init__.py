"""Domain layer: entities, enums, value objects, errors and ports."""
