"""Interface adapters."""
