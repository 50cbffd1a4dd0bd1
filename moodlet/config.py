"""Configuration management"""
import logging
import os
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

from moodlet.exceptions import ConfigurationError

load_dotenv()

# Calendar
# All calendar-day boundaries (streak gaps, the daily points cap, week keys)
# are computed in this timezone.
MOODLET_TIMEZONE: str = os.getenv("MOODLET_TIMEZONE", "UTC")

# First day of a review week: 'sunday' (default) or 'monday'
WEEK_START_DAY: str = os.getenv("WEEK_START_DAY", "sunday").lower()

# Logging
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

VALID_WEEK_START_DAYS = ("sunday", "monday")
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def validate_config() -> None:
    """Validate configuration values"""
    try:
        ZoneInfo(MOODLET_TIMEZONE)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigurationError(
            message=f"Unknown timezone '{MOODLET_TIMEZONE}'",
            config_key="MOODLET_TIMEZONE",
            cause=e
        )
    if WEEK_START_DAY not in VALID_WEEK_START_DAYS:
        raise ConfigurationError(
            message=f"WEEK_START_DAY must be one of {VALID_WEEK_START_DAYS}, got '{WEEK_START_DAY}'",
            config_key="WEEK_START_DAY"
        )
    if LOG_LEVEL not in VALID_LOG_LEVELS:
        raise ConfigurationError(
            message=f"LOG_LEVEL must be one of {VALID_LOG_LEVELS}, got '{LOG_LEVEL}'",
            config_key="LOG_LEVEL"
        )


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Configure root logging for hosts embedding the engine"""
    logging.basicConfig(
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        level=getattr(logging, level)
    )
