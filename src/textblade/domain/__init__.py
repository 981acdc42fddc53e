"""Domain layer: definitions, runtime entities and game state."""
