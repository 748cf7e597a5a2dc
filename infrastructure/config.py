"""Runtime configuration, read from the environment and an optional .env file"""
import os

from dotenv import load_dotenv

load_dotenv()


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    # ------------------------
    # Storage
    # ------------------------
    DATA_DIR = os.getenv("SMARTSTAY_DATA_DIR", "data")
    AUTOLOAD = _as_bool(os.getenv("SMARTSTAY_AUTOLOAD", "false"))

    # ------------------------
    # Logging
    # ------------------------
    LOG_LEVEL = os.getenv("SMARTSTAY_LOG_LEVEL", "INFO").upper()

    # ------------------------
    # API
    # ------------------------
    API_TITLE = os.getenv("SMARTSTAY_API_TITLE", "SmartStay Booking API")
    API_VERSION = os.getenv("SMARTSTAY_API_VERSION", "1.0.0")
