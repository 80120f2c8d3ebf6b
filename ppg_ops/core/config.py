from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ppg_ops.core.errors import ConfigurationError


class Settings(BaseSettings):
    environment: str = "ci"
    service_token: str | None = Field(default=None, validation_alias="PRISMA_POSTGRES_SERVICE_TOKEN")
    project_id: str | None = Field(default=None, validation_alias="PRISMA_PROJECT_ID")
    api_base_url: str = "https://api.prisma.io"
    region: str = "us-east-1"
    connection_key_name: str = "read_write_key"
    request_timeout_seconds: float = 30.0
    schema_commands: list[str] = ["npx prisma generate", "npx prisma db push"]
    seed_commands: list[str] = ["npx prisma generate", "npm run queries"]
    github_token: str | None = Field(default=None, validation_alias="GITHUB_TOKEN")
    github_api_url: str = Field(default="https://api.github.com", validation_alias="GITHUB_API_URL")
    github_repository: str | None = Field(default=None, validation_alias="GITHUB_REPOSITORY")
    github_event_name: str | None = Field(default=None, validation_alias="GITHUB_EVENT_NAME")
    github_event_path: str | None = Field(default=None, validation_alias="GITHUB_EVENT_PATH")
    github_run_number: str | None = Field(default=None, validation_alias="GITHUB_RUN_NUMBER")
    github_output: str | None = Field(default=None, validation_alias="GITHUB_OUTPUT")
    otel_enabled: bool = True
    otel_service_name: str = "ppg-ops"
    otel_exporter_otlp_endpoint: str | None = None
    otel_exporter_otlp_headers: str | None = None
    otel_trace_sample_ratio: float = 1.0
    otel_log_correlation: bool = True

    model_config = SettingsConfigDict(env_prefix="PPG_", extra="ignore", populate_by_name=True)


@lru_cache
def get_settings() -> Settings:
    return Settings()


def require_credentials(settings: Settings) -> tuple[str, str]:
    """Return (service token, project id) or fail the way the workflow's env check does."""
    if not settings.service_token:
        raise ConfigurationError("PRISMA_POSTGRES_SERVICE_TOKEN secret is not set")
    if not settings.project_id:
        raise ConfigurationError("PRISMA_PROJECT_ID secret is not set")
    return settings.service_token, settings.project_id
