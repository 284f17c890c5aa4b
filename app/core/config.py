"""Configuration management for the Listing Document Engine."""

from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file (only if accessible)
try:
    load_dotenv()
except (PermissionError, OSError):
    # In sandboxed environments, .env might not be accessible
    # Environment variables should be set directly
    pass


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # Supabase configuration (required)
    SUPABASE_URL: str = Field(..., description="Supabase project URL")
    SUPABASE_SERVICE_ROLE_KEY: str = Field(..., description="Supabase service role key")

    # OpenAI configuration (required)
    OPENAI_API_KEY: str = Field(..., description="OpenAI API key")

    # Anthropic configuration (optional, only needed when LLM_PROVIDER=anthropic)
    ANTHROPIC_API_KEY: str | None = Field(default=None, description="Anthropic API key")

    # Environment
    LISTING_ENGINE_ENV: str = Field(default="dev", description="Environment: dev, staging, prod")

    # LLM provider and call policy
    LLM_PROVIDER: str = Field(default="openai", description="LLM provider: openai or anthropic")
    LLM_TIMEOUT_SECONDS: float = Field(default=60.0, description="Per-call LLM timeout")
    LLM_MAX_RETRIES: int = Field(default=1, description="Retries after a timed out or transient LLM call")
    LLM_RETRY_DELAY_SECONDS: float = Field(default=1.0, description="Delay before retrying an LLM call")

    # Stage 2: Compliance rewriting
    COMPLIANCE_MODEL: str = Field(default="gpt-4o-mini", description="Model for compliance rewriting")
    COMPLIANCE_TEMPERATURE: float = Field(default=0.2, description="Compliance stage temperature")
    COMPLIANCE_MAX_TOKENS: int = Field(default=1500, description="Compliance stage token limit")

    # Stage 3: Data completion
    COMPLETION_MODEL: str = Field(default="gpt-4o-mini", description="Model for data completion")
    COMPLETION_TEMPERATURE: float = Field(default=0.2, description="Completion stage temperature")
    COMPLETION_MAX_TOKENS: int = Field(default=2000, description="Completion stage token limit")

    # Section assistant (canvas chat)
    ASSISTANT_MODEL: str = Field(default="gpt-4o", description="Model for the section assistant")
    ASSISTANT_TEMPERATURE: float = Field(default=0.7, description="Section assistant temperature")
    ASSISTANT_MAX_TOKENS: int = Field(default=1500, description="Section assistant token limit")

    # Memory service (optional)
    MEM0_API_KEY: str | None = Field(default=None, description="Mem0 platform API key")
    MEM0_BASE_URL: str = Field(default="https://api.mem0.ai", description="Mem0 platform base URL")
    MEMORY_TIMEOUT_SECONDS: float = Field(default=15.0, description="Memory service request timeout")
    MEMORY_DEFAULT_SCOPE: str = Field(default="system", description="Default memory scope (user_id)")

    # Table names
    ISSUERS_TABLE: str = Field(default="issuers", description="Business record table")
    LISTING_TABLE: str = Field(default="listing", description="Catalog/listing record table")
    LISTING_DOCUMENT_TABLE: str = Field(
        default="listingdocumentdirectlisting", description="In-progress document field table"
    )
    KNOWLEDGE_VAULT_TABLE: str = Field(
        default="knowledge_vault_documents", description="Reference-document catalog table"
    )
    PROMPT_TEMPLATE_TABLE: str = Field(
        default="direct_listingprompts", description="Section template catalog table"
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings instance

    Raises:
        ValidationError: If required environment variables are missing
    """
    return Settings()
