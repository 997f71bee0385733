"""Lookup configuration via pydantic-settings (.env + env vars)."""

import sys
from pathlib import Path

from loguru import logger
from pydantic_settings import BaseSettings, SettingsConfigDict


class RatingsConfig(BaseSettings):
    """All lookup configuration with layered resolution:
    .env file < environment variables < constructor kwargs.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    # -- Metadata API (RapidAPI IMDb proxy) --
    rapidapi_key: str = ""
    rapidapi_host: str = "imdb236.p.rapidapi.com"
    http_timeout: float = 30.0

    # -- Directories --
    data_dir: Path = Path.home() / ".local/share/imdb-ratings"
    log_dir: Path = Path.home() / ".local/state/imdb-ratings"

    # -- Behavior --
    verbose: bool = False
    log_level: str = "INFO"

    @property
    def db_path(self) -> Path:
        """Path to the SQLite movie cache."""
        return self.data_dir / "movies.db"

    @property
    def api_base(self) -> str:
        return f"https://{self.rapidapi_host}"

    def setup_logging(self) -> None:
        """Configure loguru for the CLI."""
        logger.remove()  # Remove default stderr handler

        log_format = (
            "{time:YYYY-MM-DDTHH:mm:ssZ} | {level:<8} | "
            "{extra[stage]:<8} | {message}"
        )

        def _default_extra(record):
            record["extra"].setdefault("stage", "")
            return True

        logger.add(
            sys.stderr,
            format=log_format,
            level=self.log_level.upper(),
            filter=_default_extra,
        )

        self.log_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(self.log_dir / "ratings.log"),
            format=log_format,
            level="DEBUG",
            rotation="10 MB",
            retention="30 days",
            filter=_default_extra,
        )
