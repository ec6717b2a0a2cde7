"""Agentic answer pipeline."""
