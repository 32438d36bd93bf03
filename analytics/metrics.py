"""
Analytics and Metrics Calculation Module
=========================================

This module derives the review views from parsed quiz results: scores,
student search, question lookup, class summaries and the wrong-answer export.
"""

import collections
from typing import List, Optional

import pandas as pd

from models.quiz_models import Question, QuestionBank, StudentResult

EXPORT_COLUMNS = ["name", "wronglyAnswered"]
WRONG_ANSWER_SEPARATOR = ", "


class DivisionUndefined(ZeroDivisionError):
    """Raised when a score is requested for a student with no question columns."""


def score_percent(student: StudentResult) -> float:
    """Share of correct answers, in percent, rounded to one decimal place."""
    total = student.question_count
    if total == 0:
        raise DivisionUndefined(f"{student.name!r} has no scored questions")
    return round(len(student.correct_answers) / total * 100, 1)


def format_score(student: StudentResult) -> str:
    try:
        return f"{score_percent(student):.1f}%"
    except DivisionUndefined:
        return ""


def search_filter(students: List[StudentResult], query: str) -> List[StudentResult]:
    """Case-insensitive substring match on the student name. An empty query matches nobody."""
    needle = (query or "").strip().lower()
    if not needle:
        return []
    return [s for s in students if needle in s.name.lower()]


def question_lookup(bank: Optional[QuestionBank], label: str) -> Optional[Question]:
    if not bank:
        return None
    try:
        number = int(label)
    except (TypeError, ValueError):
        return None
    return bank.get(number)


def wrong_answers_export(students: List[StudentResult]) -> str:
    """
    CSV with one row per student (list order kept) and the wrongly answered
    question labels joined by ", ".
    """
    rows = [
        {"name": s.name, "wronglyAnswered": WRONG_ANSWER_SEPARATOR.join(s.wrong_answers)}
        for s in students
    ]
    df = pd.DataFrame(rows, columns=EXPORT_COLUMNS)
    return df.to_csv(index=False, lineterminator="\r\n")


def summary_frame(students: List[StudentResult]) -> pd.DataFrame:
    flat_data = []
    for student in students:
        try:
            score = score_percent(student)
        except DivisionUndefined:
            score = None
        flat_data.append({
            "Student": student.name,
            "Correct": len(student.correct_answers),
            "Wrong": len(student.wrong_answers),
            "Score (%)": score,
        })
    return pd.DataFrame(flat_data, columns=["Student", "Correct", "Wrong", "Score (%)"])


def question_miss_counts(students: List[StudentResult]) -> pd.Series:
    """Number of students who got each question wrong, most missed first."""
    misses = collections.Counter()
    for student in students:
        misses.update(student.wrong_answers)

    if not misses:
        return pd.Series(dtype="int64")
    return pd.Series(misses).sort_values(ascending=False, kind="stable")
