"""Application configuration using pydantic-settings."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database
    database_path: Path = Path("finance_tracker.db")

    # Window / server
    app_title: str = "Finance Tracker"
    port: int = 8081
    native: bool = False  # requires pywebview
    window_width: int = 1200
    window_height: int = 850

    # Logging
    log_level: str = "INFO"

    @property
    def database_url(self) -> str:
        """Get SQLite connection URL."""
        return f"sqlite:///{self.database_path}"

    @property
    def window_size(self) -> tuple[int, int]:
        return (self.window_width, self.window_height)


settings = Settings()
