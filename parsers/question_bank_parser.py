"""
Question Bank Parser (Aiken format)
===================================

Reads a plain-text question bank where each entry is:

    Question body, one or more lines
    A) first option
    B) second option
    ANSWER: B

Blank lines carry no meaning and are removed before scanning. Lines are
matched as written: an indented "  A)" line is body text, and option lines
are kept verbatim, trailing whitespace included. Questions are
numbered 1, 2, 3... in the order they are accepted; the file itself never
states a number. Entries without body text or without options are dropped
and do not consume a number, so numbering can drift from any numbering the
author had in mind.
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List

from models.quiz_models import Question, QuestionBank
from parsers.exceptions import FileReadError, MalformedEntry

logger = logging.getLogger(__name__)

OPTION_LINE = re.compile(r"^[A-E]\)")
ANSWER_LINE = re.compile(r"^ANSWER:(.*)$")


class ScanState(Enum):
    SEEKING_BODY = auto()
    COLLECTING_OPTIONS = auto()
    SEEKING_ANSWER = auto()


@dataclass
class _PendingEntry:
    body: List[str] = field(default_factory=list)
    options: List[str] = field(default_factory=list)
    answer: str = ""


def decode_question_bank(data) -> str:
    """Decodes uploaded bytes as UTF-8 (a leading BOM is ignored)."""
    if isinstance(data, str):
        return data
    try:
        return bytes(data).decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise FileReadError(f"The question bank is not valid UTF-8 text: {e}") from e


def _build_question(number: int, entry: _PendingEntry) -> Question:
    text = " ".join(entry.body)
    if not text:
        raise MalformedEntry(f"options without a question body: {entry.options[:1]}")
    if not entry.options:
        raise MalformedEntry(f"question without options: {text[:60]!r}")
    return Question(
        number=number,
        text=text,
        options=list(entry.options),
        correct_answer=entry.answer,
    )


def _commit(bank: QuestionBank, entry: _PendingEntry):
    number = len(bank) + 1
    try:
        bank[number] = _build_question(number, entry)
    except MalformedEntry as e:
        logger.debug("Dropping question bank entry, %s", e)


def parse_question_bank(text: str) -> QuestionBank:
    """
    Single left-to-right scan over the non-blank lines.
    SEEKING_BODY collects body lines until an option line shows up,
    COLLECTING_OPTIONS collects consecutive option lines and
    SEEKING_ANSWER consumes one optional ANSWER line before committing.
    An ANSWER line met while still seeking a body closes that entry, which
    has no options and is therefore dropped.
    """
    lines = [line for line in text.splitlines() if line.strip()]
    bank: QuestionBank = {}
    entry = _PendingEntry()
    state = ScanState.SEEKING_BODY
    i = 0

    while i < len(lines):
        line = lines[i]

        if state is ScanState.SEEKING_BODY:
            answer = ANSWER_LINE.match(line)
            if OPTION_LINE.match(line):
                state = ScanState.COLLECTING_OPTIONS
                continue
            if answer:
                entry.answer = answer.group(1).strip()
                _commit(bank, entry)
                entry = _PendingEntry()
            else:
                entry.body.append(line.strip())
            i += 1

        elif state is ScanState.COLLECTING_OPTIONS:
            if OPTION_LINE.match(line):
                entry.options.append(line)
                i += 1
            else:
                state = ScanState.SEEKING_ANSWER

        elif state is ScanState.SEEKING_ANSWER:
            answer = ANSWER_LINE.match(line)
            if answer:
                entry.answer = answer.group(1).strip()
                i += 1
            _commit(bank, entry)
            entry = _PendingEntry()
            state = ScanState.SEEKING_BODY

    if entry.body or entry.options:
        _commit(bank, entry)

    logger.info("Parsed %d questions from the question bank", len(bank))
    return bank
