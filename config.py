"""
Configuration settings for the Quiz Review dashboard.
"""
import logging
import os

PAGE_TITLE = "Quiz Review"

# Identity columns of the Moodle grades export
FIRST_NAME_COLUMN = "First name"
SURNAME_COLUMNS = ("Surname", "Last name")

# Upload / download settings
RESULTS_FILE_TYPES = ["csv"]
QUESTION_BANK_FILE_TYPES = ["txt"]
EXPORT_FILE_NAME = "wronglyAnswered.csv"

LOG_LEVEL = os.getenv("QUIZ_REVIEW_LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def log_level(name: str) -> int:
    """Numeric level for a level name; unknown names fall back to INFO."""
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging():
    """Sets up root logging once per process."""
    logging.basicConfig(level=log_level(LOG_LEVEL), format=LOG_FORMAT)
