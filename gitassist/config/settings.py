from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    debug: bool = False
    cors_origins: list[str] = ["http://localhost:3000"]

    # GitHub REST API
    github_api_url: str = "https://api.github.com"
    github_api_version: str = "2022-11-28"
    # Applied by the shared HTTP client; individual calls never override it
    github_timeout_seconds: float = 30.0
    # Used when neither the caller nor the repository names a branch
    default_branch_fallback: str = "main"
    # Upper bound on concurrent blob uploads per process
    github_max_connections: int = 20

    # AI / Anthropic - text refinement for issues and release notes
    anthropic_api_key: str = ""
    refine_model: str = "claude-sonnet-4-20250514"
    refine_max_tokens: int = 2000


settings = Settings()
