"""Application layer: ports, use cases, and services."""
