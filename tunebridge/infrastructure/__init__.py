"""Infrastructure layer: library file adapters, services and the CLI."""
