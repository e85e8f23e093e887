from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # ------------------------------------------------------------------
    # Rate-limit budgets
    # ------------------------------------------------------------------
    max_workflow_weight: int = 1000
    max_node_weight: int = 100
    warn_threshold: float = 0.8  # fraction of max_workflow_weight

    # ------------------------------------------------------------------
    # Naming conventions (regular expression sources)
    # ------------------------------------------------------------------
    workflow_id_pattern: str = r"^automation-[A-Za-z0-9]{15}$"
    node_id_pattern: str = r"^[a-zA-Z][a-zA-Z0-9_-]*$"
    variable_name_pattern: str = r"^[a-zA-Z][a-zA-Z0-9_]*$"

    # ------------------------------------------------------------------
    # Validation service
    # ------------------------------------------------------------------
    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    class Config:
        env_prefix = "AUTOFLOW_"
        env_file = ".env"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
