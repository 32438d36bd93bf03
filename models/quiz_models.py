"""
Data Models for Quiz Review
===========================

This module defines the data structures used to represent quiz results and
question banks throughout the parsing and review pipeline. All models are
implemented as dataclasses.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

CellValue = Union[str, int, float]


@dataclass
class ScoredRow:
    """One student's row from the results table, keyed by column name in file order."""
    cells: Dict[str, CellValue] = field(default_factory=dict)

    def get(self, column: str) -> Optional[CellValue]:
        return self.cells.get(column)


@dataclass
class StudentResult:
    name: str
    correct_answers: List[str] = field(default_factory=list)
    wrong_answers: List[str] = field(default_factory=list)

    @property
    def question_count(self) -> int:
        return len(self.correct_answers) + len(self.wrong_answers)


@dataclass
class Question:
    number: int
    text: str
    options: List[str] = field(default_factory=list)
    correct_answer: str = ""


QuestionBank = Dict[int, Question]
