"""
Results Parser Module for Moodle Grade Exports
==============================================

This module turns a quiz grades export (one row per student, one score column
per question) into per-student lists of correctly and wrongly answered
questions.

Score columns are recognised by a capital "Q" anywhere in the header, e.g.
"Q. 3 /2.50". The match is intentionally loose: any other header containing
a capital Q is treated as a question column too. A score of zero marks the
question as wrong; anything else (non-zero, blank, "-") counts as correct.
"""

import csv
import io
import logging
import math
import re
from typing import Iterable, List, Optional

import pandas as pd

from config import FIRST_NAME_COLUMN, SURNAME_COLUMNS
from models.quiz_models import CellValue, ScoredRow, StudentResult
from parsers.exceptions import TableParseError

logger = logging.getLogger(__name__)

QUESTION_MARKER = "Q"
QUESTION_PREFIX = "Q. "
MAX_SCORE_SUFFIX = re.compile(r" /[\d.]+$")
DELIMITERS = (",", ";", "\t", "|")


def _read_text(source) -> str:
    if isinstance(source, (bytes, bytearray)):
        data = bytes(source)
    elif hasattr(source, "read"):
        data = source.read()
    else:
        try:
            with open(source, "rb") as f:
                data = f.read()
        except OSError as e:
            raise TableParseError(f"Could not open the results file: {e}") from e

    if isinstance(data, str):
        return data
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise TableParseError(f"The results file is not valid UTF-8 text: {e}") from e


def detect_delimiter(header_line: str) -> str:
    """The candidate that occurs most often in the header wins; ties and no hits fall back to comma."""
    return max(DELIMITERS, key=header_line.count)


def read_results_table(source) -> List[ScoredRow]:
    """
    Reads a delimited results table into ScoredRows.
    Accepts a path, raw bytes or a binary file-like object (e.g. a Streamlit upload).
    Every cell is kept as text; blank lines are skipped. Rows longer than the
    header keep only the first header-width cells, shorter rows are padded
    with blanks, so one bad row never sinks the whole file.
    """
    text = _read_text(source)
    header_line = next((line for line in text.splitlines() if line.strip()), None)
    if header_line is None:
        raise TableParseError("The results file is empty or has no header row.")

    sep = detect_delimiter(header_line)
    width = len(next(csv.reader([header_line], delimiter=sep)))

    def keep_header_width(fields):
        logger.warning("Row with %d fields cut to the %d header columns", len(fields), width)
        return fields[:width]

    try:
        df = pd.read_csv(
            io.StringIO(text),
            sep=sep,
            engine="python",
            index_col=False,
            on_bad_lines=keep_header_width,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except pd.errors.EmptyDataError as e:
        raise TableParseError("The results file is empty or has no header row.") from e
    except (ValueError, csv.Error) as e:
        raise TableParseError(f"Could not read the results table: {e}") from e

    # Short rows leave NaN behind even with keep_default_na=False
    df = df.fillna("")
    rows = [ScoredRow(cells=record) for record in df.to_dict(orient="records")]
    logger.debug("Read %d rows with %d columns", len(rows), len(df.columns))
    return rows


def is_question_column(column: str) -> bool:
    return QUESTION_MARKER in column


def question_label(column: str) -> str:
    """Strips header decoration: 'Q. 3 /2.5' -> '3'. Undecorated headers keep whatever is left."""
    return MAX_SCORE_SUFFIX.sub("", column.replace(QUESTION_PREFIX, "", 1))


def is_wrong(value: Optional[CellValue]) -> bool:
    """A zero score, numeric or textual ("0", "0.00"), is a wrong answer."""
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return value == 0
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return False
        try:
            return float(text) == 0
        except ValueError:
            return False
    return False


def _cell_text(value: Optional[CellValue]) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    return str(value).strip()


def student_name(row: ScoredRow) -> str:
    first_name = _cell_text(row.get(FIRST_NAME_COLUMN))
    surname = next(
        (_cell_text(row.get(column)) for column in SURNAME_COLUMNS if column in row.cells),
        "",
    )
    return " ".join(part for part in (first_name, surname) if part)


def parse_row(row: ScoredRow) -> StudentResult:
    result = StudentResult(name=student_name(row))
    if not result.name:
        logger.debug("Row without identity fields: %s", list(row.cells)[:5])

    for column, value in row.cells.items():
        if not is_question_column(column):
            continue
        label = question_label(column)
        if is_wrong(value):
            result.wrong_answers.append(label)
        else:
            result.correct_answers.append(label)

    return result


def parse_results(rows: Iterable[ScoredRow]) -> List[StudentResult]:
    results = [parse_row(row) for row in rows]
    logger.info("Parsed results for %d students", len(results))
    return results
