"""
Centralized configuration management.
All environment variables and settings are defined here.
"""
import tempfile
from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.schema import SheetLayout


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = Field(default="Statement Cleaner Service", alias="APP_NAME")
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=6666)
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    cors_allow_origins: List[str] = Field(default=["*"], alias="CORS_ALLOW_ORIGINS")

    # Storage
    temp_storage_path: str = Field(default_factory=tempfile.gettempdir, alias="STORAGE_PATH")

    # Statement layout
    header_rows: int = Field(default=25, alias="HEADER_ROWS")
    footer_rows: int = Field(default=14, alias="FOOTER_ROWS")
    reference_column: int = Field(default=0, alias="REFERENCE_COLUMN")
    memo_column: int = Field(default=24, alias="MEMO_COLUMN")
    amount_column: int = Field(default=37, alias="AMOUNT_COLUMN")
    min_row_width: int = Field(default=39, alias="MIN_ROW_WIDTH")
    amount_header_token: str = Field(default="Amount", alias="AMOUNT_HEADER_TOKEN")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level is one of the standard levels."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v_upper

    @field_validator("port")
    @classmethod
    def validate_port(cls, v):
        """Validate port is in valid range."""
        if not (1 <= v <= 65535):
            raise ValueError("Port must be between 1 and 65535")
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def layout(self) -> SheetLayout:
        """
        Build the statement layout from the configured positions.

        Raises:
            pydantic.ValidationError: If the positions are inconsistent
        """
        return SheetLayout(
            header_rows=self.header_rows,
            footer_rows=self.footer_rows,
            reference_column=self.reference_column,
            memo_column=self.memo_column,
            amount_column=self.amount_column,
            min_row_width=self.min_row_width,
            amount_header_token=self.amount_header_token,
        )

    def ensure_directories(self) -> None:
        """Ensure the upload directory exists."""
        Path(self.temp_storage_path).mkdir(parents=True, exist_ok=True)


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns:
        Settings instance
    """
    global _settings
    if _settings is None:
        _settings = Settings()
        _settings.ensure_directories()
    return _settings


def reset_settings() -> None:
    """Reset settings singleton (useful for testing)."""
    global _settings
    _settings = None
