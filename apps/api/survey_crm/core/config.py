"""Application configuration with environment variables."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# apps/api/survey_crm/core/config.py -> apps/web
DEFAULT_STATIC_DIR = Path(__file__).resolve().parents[3] / "web"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Environment ("dev" or "production")
    ENV: str = "dev"

    VERSION: str = "1.0.0"

    # Listening address
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # Database (empty -> SQLite file chosen by ENV)
    DATABASE_URL: str = ""

    # CORS (comma-separated, "*" for any origin)
    CORS_ORIGINS: str = "*"

    LOG_LEVEL: str = "INFO"

    # Error Tracking (optional, set in production)
    SENTRY_DSN: str = ""

    # Dashboard client assets (empty -> apps/web)
    STATIC_DIR: str = ""

    @property
    def is_dev(self) -> bool:
        return self.ENV != "production"

    @property
    def database_url(self) -> str:
        """Resolve the store location, falling back to a local SQLite file."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        if self.ENV == "production":
            # Writable path on ephemeral hosts
            return "sqlite:////tmp/eco4_surveys.db"
        return "sqlite:///./eco4_surveys.db"

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS_ORIGINS into a list."""
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def static_dir(self) -> Path:
        return Path(self.STATIC_DIR) if self.STATIC_DIR else DEFAULT_STATIC_DIR


settings = Settings()
