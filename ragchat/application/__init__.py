"""Application layer: pipelines, adapters and services."""
