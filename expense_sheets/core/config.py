from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment with defaults.

    Environment variable mapping follows pydantic's rules (e.g., APP_NAME, DEBUG, DATA_DIR, DB_FILENAME, NOTIFICATION_TTL_SECONDS).
    """

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Basic app metadata
    app_name: str = "Expense Sheets"
    debug: bool = False
    version: str = "0.1.0"

    # Data & persistence (endpoint URL lives in the metadata table)
    data_dir: Path = Path("data")
    db_filename: str = "app.sqlite3"
    db_path: Optional[Path] = None  # derived if not provided

    # Notification banner lifetime, measured from the moment it is set
    notification_ttl_seconds: float = 5.0

    # Only Apps Script web app URLs are accepted as endpoints
    sheets_url_prefix: str = "https://script.google.com/macros/s/"

    def init_post_load(self) -> None:
        """Finalize derived fields and ensure directories exist."""
        if self.db_path is None:
            self.db_path = self.data_dir / self.db_filename
        self.db_path = Path(self.db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        if self.notification_ttl_seconds <= 0:
            raise ValueError(
                f"notification_ttl_seconds must be positive, got {self.notification_ttl_seconds}"
            )
        if not self.sheets_url_prefix.startswith("https://"):
            raise ValueError(
                f"Unsupported sheets_url_prefix '{self.sheets_url_prefix}': must be an https URL"
            )


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    settings.init_post_load()
    return settings
