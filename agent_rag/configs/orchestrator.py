"""
Response orchestrator configuration settings.

LLM model selection, per-stage timeouts and conversation history windowing.

Dependencies: pydantic, pydantic_settings
System role: Answer pipeline configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SYSTEM_PROMPT = (
    "You are a helpful AI assistant with web search capabilities. "
    "You can search the internet to provide up-to-date information."
)


class OrchestratorSettings(BaseSettings):
    """Settings for the multi-stage response orchestrator."""

    model_config = SettingsConfigDict(
        env_prefix="ORCHESTRATOR_",
        case_sensitive=False,
        extra="ignore",
    )

    llm_model: str = Field(default="gemini-2.5-flash", description="Chat model identifier")
    temperature: float = Field(default=0.2, ge=0.0, le=2.0, description="Sampling temperature")

    stage_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout applied to every external call made by a stage",
    )
    rag_top_k: int = Field(default=5, ge=1, description="Knowledge base matches per request")
    history_window: int | None = Field(
        default=None,
        ge=1,
        description="Most recent turns passed to the LLM (None passes the full history)",
    )
    system_prompt: str = Field(default=DEFAULT_SYSTEM_PROMPT, description="Initial system turn")
