"""Runtime configuration and Gemini client construction."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .errors import ConfigurationError

load_dotenv()

logger = logging.getLogger(__name__)

# =============================================================================
# CONFIGURATION
# =============================================================================

DEFAULT_MODEL = "gemini-2.5-flash"
ITEMS_PER_PAGE = 6
DEBOUNCE_SECONDS = 0.3
COPY_NOTICE_SECONDS = 2.0
TASKS_KEY = "npoTasks"
DEFAULT_STORAGE_PATH = Path.home() / ".npoconnect" / "storage.json"
BUNDLED_DATASET = Path(__file__).parent / "data" / "organizations.json"

API_KEY_VARS = ("GEMINI_API_KEY", "API_KEY")


@dataclass
class Settings:
    """Process-wide settings, read once at start."""
    api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    dataset_path: Path = BUNDLED_DATASET
    storage_path: Path = DEFAULT_STORAGE_PATH


def load_settings(environ: Optional[dict] = None) -> Settings:
    """Build settings from environment variables.

    Args:
        environ: Mapping to read instead of ``os.environ`` (for tests)

    Returns:
        Settings with defaults for anything not set
    """
    env = os.environ if environ is None else environ

    api_key = None
    for var in API_KEY_VARS:
        value = env.get(var)
        if value:
            api_key = value
            break

    settings = Settings(api_key=api_key)
    if env.get("NPOCONNECT_MODEL"):
        settings.model = env["NPOCONNECT_MODEL"]
    if env.get("NPOCONNECT_DATA"):
        settings.dataset_path = Path(env["NPOCONNECT_DATA"])
    if env.get("NPOCONNECT_STORAGE"):
        settings.storage_path = Path(env["NPOCONNECT_STORAGE"])
    return settings


def create_client(settings: Settings):
    """Create the Gemini client shared by every generation feature.

    Raises:
        ConfigurationError: if no API key is configured
    """
    if not settings.api_key:
        raise ConfigurationError(
            "GEMINI_API_KEY not found in environment (API_KEY is also accepted)"
        )

    from google import genai
    client = genai.Client(api_key=settings.api_key)
    logger.debug(f"Gemini client created for model {settings.model}")
    return client
