"""Repository package: per-aggregate data access for each service."""
