"""Core domain layer: models, schemas, repositories and services."""
