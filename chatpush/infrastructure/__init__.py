"""Infrastructure layer: persistence, event bus and push adapters."""
