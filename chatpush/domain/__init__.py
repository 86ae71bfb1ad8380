"""Domain layer: entities, errors and collaborator protocols."""
