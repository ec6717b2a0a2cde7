"""Namespace naming for per-agent vector partitions."""

DEFAULT_KNOWLEDGE_PREFIX = "agent-"
DEFAULT_WEB_PREFIX = "web-search-"


def knowledge_namespace(owner_id: str, prefix: str = DEFAULT_KNOWLEDGE_PREFIX) -> str:
    """Namespace holding an owner's uploaded documents."""
    return f"{prefix}{owner_id}"


def web_namespace(owner_id: str, prefix: str = DEFAULT_WEB_PREFIX) -> str:
    """Namespace holding web results an owner has saved."""
    return f"{prefix}{owner_id}"
