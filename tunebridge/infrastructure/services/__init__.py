"""Services that wire file adapters around the migration use case."""
