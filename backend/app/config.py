"""
Configuration management for the PDF Field Extractor application.
Loads tool, matching and API settings from environment variables.
"""
import os
from typing import Optional
from dotenv import load_dotenv

# Load environment variables from .env file if it exists
load_dotenv()


class Config:
    """Configuration class for extraction tooling and label matching."""

    # Field dump tool (pdftk)
    PDFTK_COMMAND: str = os.getenv('PDFTK_COMMAND', 'pdftk')
    PDFTK_TIMEOUT: int = int(os.getenv('PDFTK_TIMEOUT', '60'))

    # Label inference
    # Minimum text-match score before falling back to name-based inference
    LABEL_MATCH_THRESHOLD: float = float(os.getenv('LABEL_MATCH_THRESHOLD', '0.5'))
    INFERRED_LABEL_CONFIDENCE: float = float(os.getenv('INFERRED_LABEL_CONFIDENCE', '0.7'))

    # Uploads
    UPLOAD_DIR: str = os.getenv('UPLOAD_DIR', '/tmp/pdf-uploads')
    MAX_UPLOAD_MB: int = int(os.getenv('MAX_UPLOAD_MB', '50'))

    # API Settings
    API_HOST: str = os.getenv('API_HOST', '0.0.0.0')
    API_PORT: int = int(os.getenv('API_PORT', '3002'))
    CORS_ORIGINS: list = os.getenv('CORS_ORIGINS', '*').split(',')
    LOG_LEVEL: str = os.getenv('LOG_LEVEL', 'INFO')

    FRONTEND_URL: Optional[str] = os.getenv('FRONTEND_URL')

    @classmethod
    def validate(cls) -> bool:
        """
        Validate that configuration values are usable.
        """
        if not cls.PDFTK_COMMAND:
            raise ValueError("PDFTK_COMMAND must name the pdftk executable.")

        if not 0.0 <= cls.LABEL_MATCH_THRESHOLD <= 1.0:
            raise ValueError(
                f"LABEL_MATCH_THRESHOLD must be between 0 and 1, got {cls.LABEL_MATCH_THRESHOLD}"
            )

        if not 0.0 <= cls.INFERRED_LABEL_CONFIDENCE <= 1.0:
            raise ValueError(
                f"INFERRED_LABEL_CONFIDENCE must be between 0 and 1, got {cls.INFERRED_LABEL_CONFIDENCE}"
            )

        if cls.MAX_UPLOAD_MB <= 0:
            raise ValueError("MAX_UPLOAD_MB must be a positive number of megabytes.")

        if cls.PDFTK_TIMEOUT <= 0:
            raise ValueError("PDFTK_TIMEOUT must be a positive number of seconds.")
        return True

    @classmethod
    def get_cors_origins(cls) -> list:
        """
        Get allowed CORS origins, preferring an explicit frontend URL.
        """
        if cls.FRONTEND_URL:
            return [cls.FRONTEND_URL]
        return [origin.strip() for origin in cls.CORS_ORIGINS if origin.strip()]
