"""Runtime configuration read from the environment."""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

from procflow.models.simulation import DEFAULT_ANNUAL_FREQUENCY, DEFAULT_HOURLY_RATE

load_dotenv()  # load environment variables from .env file

DEFAULT_DB_PATH = Path.cwd() / "data" / "procflow.db"
FLOW_DB_PATH = Path(os.getenv("PROCFLOW_DB_PATH", str(DEFAULT_DB_PATH)))

# name given to a brand-new working document
DEFAULT_FLOW_NAME = os.getenv("PROCFLOW_DEFAULT_FLOW_NAME", "新規フロー")

HOURLY_RATE = float(os.getenv("PROCFLOW_DEFAULT_HOURLY_RATE", str(DEFAULT_HOURLY_RATE)))
ANNUAL_FREQUENCY = float(os.getenv("PROCFLOW_DEFAULT_ANNUAL_FREQUENCY", str(DEFAULT_ANNUAL_FREQUENCY)))

OPENAI_MODEL = os.getenv("PROCFLOW_OPENAI_MODEL", "gpt-4o-mini")

LOG_LEVEL = os.getenv("PROCFLOW_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | int = LOG_LEVEL, *, force: bool = False) -> logging.Logger:
    """Configure root logging once and return the package logger."""
    logging.basicConfig(level=level, format=LOG_FORMAT, force=force)
    logger = logging.getLogger("procflow")
    logger.setLevel(level)
    return logger


def get_openai_api_key() -> str | None:
    return os.getenv("OPENAI_API_KEY")
