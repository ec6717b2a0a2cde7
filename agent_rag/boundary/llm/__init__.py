"""
LLM boundary layer.

Dependencies: langchain_google_genai
System role: Chat model adapters
"""

from agent_rag.boundary.llm.base import CompletionOptions, LLMProvider

__all__ = ["CompletionOptions", "LLMProvider"]
