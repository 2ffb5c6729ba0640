"""Configuration schemas — OpenAI request settings and app settings."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

ModelName = Literal["gpt-4", "gpt-4-turbo", "gpt-3.5-turbo"]

DEFAULT_MODEL: ModelName = "gpt-4"
DEFAULT_MAX_TOKENS = 1500
DEFAULT_TEMPERATURE = 0.1
DEFAULT_BASE_URL = "https://api.openai.com/v1"


class OpenAIConfig(BaseModel):
    """Per-call settings for a live analysis.

    ``api_key`` is passed straight through as the bearer credential.
    """

    model_config = ConfigDict(frozen=True)

    api_key: str
    model: ModelName = DEFAULT_MODEL
    max_tokens: int = Field(default=DEFAULT_MAX_TOKENS, gt=0)
    temperature: float = Field(default=DEFAULT_TEMPERATURE, ge=0.0, le=2.0)
    base_url: str = DEFAULT_BASE_URL

    def __repr__(self) -> str:
        # Keep the credential out of logs and tracebacks.
        return (
            f"OpenAIConfig(model={self.model!r}, max_tokens={self.max_tokens}, "
            f"temperature={self.temperature}, base_url={self.base_url!r})"
        )

    __str__ = __repr__


class AppSettings(BaseModel):
    """Top-level settings loaded from an optional YAML file.

    The credential is deliberately absent: it is only ever entered in the UI
    or passed on the command line.
    """

    # Server
    host: str = "127.0.0.1"
    port: int = Field(default=8000, ge=1, le=65535)
    max_sessions: int = Field(default=256, ge=1)

    # Live analysis defaults
    model: ModelName = DEFAULT_MODEL
    max_tokens: int = Field(default=DEFAULT_MAX_TOKENS, gt=0)
    temperature: float = Field(default=DEFAULT_TEMPERATURE, ge=0.0, le=2.0)
    api_base_url: str = DEFAULT_BASE_URL

    # Demo mode
    mock_delay_seconds: float = Field(default=1.5, ge=0.0)

    @field_validator("api_base_url")
    @classmethod
    def check_base_url(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"api_base_url must be an http(s) URL, got {value!r}")
        return value.rstrip("/")

    def openai_config(self, api_key: str) -> OpenAIConfig:
        """Build the per-call config for a live analysis with *api_key*."""
        return OpenAIConfig(
            api_key=api_key,
            model=self.model,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
            base_url=self.api_base_url,
        )
