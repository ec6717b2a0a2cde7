"""Core business logic: ingestion, retrieval, caching and answer orchestration."""
