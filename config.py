"""
Simple configuration for the Contr'Act analysis service.
"""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _optional_float(name):
    value = os.environ.get(name)
    return float(value) if value else None


class Config:
    """Configuration class for the Contr'Act analysis service."""

    # API Configuration
    OPENAI_API_KEY = os.environ.get("OPENAI_API_KEY")
    OPENAI_BASE_URL = os.environ.get("OPENAI_BASE_URL")

    # Model Settings
    ANALYSIS_MODEL = os.environ.get("ANALYSIS_MODEL", "gpt-4o-mini")
    ANALYSIS_TEMPERATURE = float(os.environ.get("ANALYSIS_TEMPERATURE", "0.1"))
    REQUEST_TIMEOUT = _optional_float("REQUEST_TIMEOUT")

    # Token budgets per operation
    ANALYSIS_MAX_TOKENS = 4000
    CHAT_MAX_TOKENS = 1000
    NEGOTIATION_MAX_TOKENS = 2500
    LEGAL_MAX_TOKENS = 3000

    # File Upload
    UPLOAD_FOLDER = 'uploads'
    MAX_FILE_SIZE = 16 * 1024 * 1024  # 16MB

    # API Settings
    API_HOST = os.environ.get("API_HOST", "0.0.0.0")
    API_PORT = int(os.environ.get("API_PORT", "5001"))
    API_DEBUG = os.environ.get("API_DEBUG", "false").lower() == "true"
    API_VERSION = "1.0.0"


# Module-level shortcuts used by the Flask app
UPLOAD_FOLDER = Config.UPLOAD_FOLDER
MAX_FILE_SIZE = Config.MAX_FILE_SIZE
API_HOST = Config.API_HOST
API_PORT = Config.API_PORT
API_DEBUG = Config.API_DEBUG
API_VERSION = Config.API_VERSION
