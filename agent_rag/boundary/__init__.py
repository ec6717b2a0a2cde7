"""Boundary adapters for external providers (vector stores, embeddings, LLMs, web search)."""
