"""
Configuration settings for the application.
"""

import logging
import os

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    # Environment
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")

    # HTTP server settings
    API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
    API_PORT: int = int(os.getenv("API_PORT", "8000"))

    # Single browser origin allowed to call the API
    CORS_ALLOWED_ORIGIN: str = os.getenv(
        "CORS_ALLOWED_ORIGIN",
        "http://localhost:3000",
    )

    # Registry settings
    SEED_DEFAULT_PRODUCTS: bool = (
        os.getenv("SEED_DEFAULT_PRODUCTS", "true").lower() == "true"
    )

    @property
    def is_production(self) -> bool:
        """
        Check if running in production environment.
        """
        return self.ENVIRONMENT.lower() == "production"

    @property
    def docs_enabled(self) -> bool:
        """Return True when the interactive API docs should be served."""
        return not self.is_production

    def __init__(self):
        self.debug = os.getenv("DEBUG", "false").lower() == "true"
        self.log_level = os.getenv("LOG_LEVEL", "INFO")
        logging.basicConfig(level=self.log_level)
        self.logger = logging.getLogger(__name__)

        self.logger.debug(
            f"Config initialized with environment={self.ENVIRONMENT}, "
            f"debug={self.debug}, log_level={self.log_level}"
        )


# Create a global settings instance for import
settings = Settings()
