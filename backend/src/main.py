"""Main application entry point."""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent))

import uvicorn
from shared import ConfigurationError, setup_logging, get_logger
from infrastructure.config.settings import get_settings

logger = get_logger(__name__)


def main():
    """Main entry point."""
    try:
        settings = get_settings()
    except ConfigurationError as e:
        setup_logging()
        logger.error("invalid_configuration", config_key=e.config_key, error_message=str(e))
        sys.exit(1)

    setup_logging(
        log_level=settings.log_level,
        json_logs=settings.log_json
    )

    logger.info(
        "Starting Custom Product Relay",
        environment=settings.app_env,
        version=settings.app_version,
        config=settings.mask_sensitive()
    )

    uvicorn.run(
        "infrastructure.api.app:create_app",
        factory=True,
        host="0.0.0.0",
        port=settings.port,
        reload=settings.is_development,
        log_level=settings.log_level.lower()
    )


if __name__ == "__main__":
    main()
