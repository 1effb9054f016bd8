"""
Application configuration using Pydantic Settings.

Loads configuration from environment variables (EXTSECRET_*) and .env file.
"""

from typing import TYPE_CHECKING

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:
    from extsecret.shared.infrastructure.resilience.retry import RetryConfig


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_prefix="EXTSECRET_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="extsecret", description="Application name")
    app_env: str = Field(default="development", description="Environment (development/production)")
    log_level: str = Field(default="INFO", description="Logging level")

    # Logging / Privacy
    log_redaction_enabled: bool = Field(default=True, description="Mask secret values in logs")

    # Inputs, relative to the --dir directory
    schema_file: str = Field(
        default=".jx/gitops/secret-schema.yaml",
        description="Schema describing how to prompt for each property",
    )
    requirements_file: str = Field(
        default="jx-requirements.yml",
        description="Requirements file exposed to templates as Requirements",
    )

    # Secret lookup retry (defaults follow the Kubernetes client default backoff)
    retry_max_attempts: int = Field(default=4, ge=1, description="Attempts when a secret is not found")
    retry_initial_delay: float = Field(default=0.01, ge=0, description="First retry delay in seconds")
    retry_backoff_factor: float = Field(default=5.0, ge=1, description="Delay multiplier per attempt")
    retry_max_delay: float = Field(default=10.0, ge=0, description="Upper bound for a single delay")
    retry_jitter: bool = Field(default=True, description="Randomize retry delays")

    # Resolution
    htpasswd_rounds: int = Field(default=10, ge=4, le=31, description="bcrypt cost for htpasswdSecret")
    error_policy: str = Field(default="per_key", description="per_key or fail_fast")
    command_timeout: float = Field(default=60.0, description="Timeout for vault/gcloud commands")

    @field_validator("error_policy")
    @classmethod
    def _validate_error_policy(cls, value: str) -> str:
        normalized = value.lower().replace("-", "_")
        if normalized not in ("per_key", "fail_fast"):
            raise ValueError(f"error_policy must be per_key or fail_fast, got: {value}")
        return normalized

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env.lower() == "development"

    def retry_config(self) -> "RetryConfig":
        """Build the retry policy used for secret lookups."""
        from extsecret.shared.infrastructure.resilience.retry import RetryConfig

        return RetryConfig(
            max_attempts=self.retry_max_attempts,
            initial_delay=self.retry_initial_delay,
            max_delay=self.retry_max_delay,
            exponential_base=self.retry_backoff_factor,
            jitter=self.retry_jitter,
        )


# Global settings instance
settings = Settings()
