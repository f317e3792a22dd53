"""
Main entry point for the statement cleaner service.

This module loads configuration, validates the statement layout,
and starts the FastAPI server.
"""
import sys
from pathlib import Path

# Add project root to Python path for module imports
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from dotenv import load_dotenv
from pydantic import ValidationError

from core.config import get_settings
from core.exceptions import ConfigurationError
from core.logger import setup_logger, uvicorn_log_config

# Load environment variables from .env file
_env_file = PROJECT_ROOT / ".env"
if _env_file.exists():
    load_dotenv(_env_file)

logger = setup_logger(__name__)


def load_configuration():
    """
    Load settings and check the statement layout.

    Returns:
        Tuple of (settings, layout)

    Raises:
        ConfigurationError: If settings or layout fail validation
    """
    try:
        settings = get_settings()
        layout = settings.layout()
    except ValidationError as e:
        raise ConfigurationError(
            "Invalid configuration",
            details={"errors": e.errors(include_url=False)}
        )
    return settings, layout


def main():
    """Main application entry point."""
    try:
        settings, layout = load_configuration()

        import uvicorn
        from app.api import app

        logger.info(f"Starting {settings.app_name}")
        logger.info(f"Log Level: {settings.log_level}")
        logger.info(
            f"Layout: drop {layout.header_rows} header / {layout.footer_rows} footer rows, "
            f"columns ref={layout.reference_column} memo={layout.memo_column} "
            f"amount={layout.amount_column}, min width {layout.min_row_width}"
        )
        logger.info(f"Temp Storage: {settings.temp_storage_path}")

        logger.info(f"Starting server on {settings.host}:{settings.port}")

        uvicorn.run(
            app,
            host=settings.host,
            port=settings.port,
            log_config=uvicorn_log_config(settings.log_level)
        )

    except ConfigurationError as e:
        logger.error(f"Configuration error: {e.message}")
        if e.details:
            logger.error(f"Details: {e.details}")
        sys.exit(1)

    except Exception as e:
        logger.error(f"Failed to start application: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
