"""Application layer: lifecycle manager, context wiring and use cases."""
