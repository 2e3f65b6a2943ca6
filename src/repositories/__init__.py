"""Repository adapters."""
