"""
Agent RAG service.

Document ingestion, knowledge-base retrieval and a resilient answer
orchestrator combining retrieval, LLM expansion, summarization and web search.
"""

__version__ = "0.1.0"
