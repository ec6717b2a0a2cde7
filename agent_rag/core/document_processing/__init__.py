"""
Document processing pipeline.

Chunk -> embed -> upsert ingestion for agent knowledge bases.
"""
