"""
Response orchestrator prompts and degraded-output labels.

Prompt templates for the expand, summarize and compose stages, plus the
fixed labels used when a stage falls back.

Dependencies: langchain_core.prompts
System role: Prompt templates for the answer pipeline
"""

from langchain_core.prompts import PromptTemplate

EXPAND_PROMPT = PromptTemplate.from_template(
    """Use the knowledge base passages below to expand on the user's question.
Explain the relevant background and point out what is still unknown.

Knowledge base passages:
{context}

Question: {question}"""
)

SUMMARY_PROMPT = PromptTemplate.from_template(
    """Summarize the following text in a few sentences. Keep every concrete fact.

Text:
{content}"""
)

COMPOSE_PROMPT = PromptTemplate.from_template(
    """Answer the user's question using the material below. Cite web sources by
their number in square brackets, e.g. [1].

Knowledge base passages:
{context}

Expanded context:
{expansion}

Summary:
{summary}

Web results:
{web_results}

Question: {question}"""
)

NO_CONTEXT = "No relevant passages found."
NO_WEB_RESULTS = "No web results."

# Substitutes used when a stage fails
RAG_UNAVAILABLE = "[Knowledge base unavailable]"
EXPANSION_UNAVAILABLE = "[Context expansion unavailable]"
SUMMARY_UNAVAILABLE = "[Summary unavailable]"
WEB_SEARCH_UNAVAILABLE = "[Web search unavailable]"
COMPOSE_FALLBACK_HEADER = "[Answer assembled without the language model] Here is what I found:"

GENERIC_APOLOGY = (
    "I'm sorry, I wasn't able to put together an answer right now. Please try again."
)
