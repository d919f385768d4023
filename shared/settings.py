"""Centralised application configuration.

Settings are loaded from environment variables or the `.env` file in the
project root. Using pydantic's BaseSettings provides convenient parsing
and type checking. The service instantiates one Settings instance at
startup; the completion provider, listening port, CORS origins and
observability toggles all live here so behaviour is consistent between
local runs and deployments.
"""

from __future__ import annotations

from typing import List

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # Completion provider ("groq" or "gemini")
    llm_provider: str = Field(
        default="groq", validation_alias=AliasChoices("LLM_PROVIDER", "llm_provider")
    )

    # Groq
    groq_api_key: str | None = Field(
        default=None, validation_alias=AliasChoices("GROQ_API_KEY", "groq_api_key")
    )
    groq_model: str = Field(
        default="openai/gpt-oss-20b",
        validation_alias=AliasChoices("GROQ_MODEL", "groq_model"),
    )

    # Gemini
    gemini_api_key: str | None = Field(
        default=None, validation_alias=AliasChoices("GEMINI_API_KEY", "gemini_api_key")
    )
    gemini_model: str = Field(
        default="gemini-2.5-flash",
        validation_alias=AliasChoices("GEMINI_MODEL", "gemini_model"),
    )

    # HTTP server
    host: str = Field(default="0.0.0.0", validation_alias=AliasChoices("HOST", "host"))
    port: int = Field(default=3000, validation_alias=AliasChoices("PORT", "port"))
    # Comma-separated list; "*" allows any origin
    cors_origins: str = Field(
        default="*", validation_alias=AliasChoices("CORS_ORIGINS", "cors_origins")
    )

    # Logging/observability
    log_level: str = Field("INFO", validation_alias=AliasChoices("LOG_LEVEL"))
    log_json: bool = Field(True, validation_alias=AliasChoices("LOG_JSON"))
    langfuse_enabled: bool = Field(True, validation_alias=AliasChoices("LANGFUSE_ENABLED"))
    langfuse_host: str = Field("", validation_alias=AliasChoices("LANGFUSE_HOST"))
    langfuse_public_key: str = Field(
        "", validation_alias=AliasChoices("LANGFUSE_PUBLIC_KEY")
    )
    langfuse_secret_key: str = Field(
        "", validation_alias=AliasChoices("LANGFUSE_SECRET_KEY")
    )
    trace_name: str = Field("coach-trace", validation_alias=AliasChoices("TRACE_NAME"))

    def cors_origin_list(self) -> List[str]:
        """Return configured CORS origins, defaulting to ``["*"]``."""
        origins = [o.strip().rstrip("/") for o in self.cors_origins.split(",")]
        return [o for o in origins if o] or ["*"]

    def active_api_key(self) -> str | None:
        """API key for the selected completion provider, if configured."""
        if self.llm_provider.lower() == "gemini":
            return self.gemini_api_key
        return self.groq_api_key

    def active_model(self) -> str:
        if self.llm_provider.lower() == "gemini":
            return self.gemini_model
        return self.groq_model
