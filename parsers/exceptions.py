"""
Errors raised while loading uploaded quiz files.
"""


class QuizReviewError(Exception):
    """Base class for upload errors shown to the user."""


class TableParseError(QuizReviewError):
    """The results file could not be read as a table."""


class FileReadError(QuizReviewError):
    """The question bank file could not be read."""


class MalformedEntry(QuizReviewError):
    """A question bank entry without body text or options. Dropped, never shown."""
