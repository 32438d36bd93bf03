"""
Data Management
===============

Loads uploaded files into the session. A new upload is parsed completely
before it replaces what is in st.session_state; a failed upload leaves the
previous data in place.
"""
import logging
from typing import List, Optional

import streamlit as st

from analytics.metrics import wrong_answers_export
from config import EXPORT_FILE_NAME
from models.quiz_models import QuestionBank, StudentResult
from parsers.exceptions import FileReadError, QuizReviewError
from parsers.question_bank_parser import decode_question_bank, parse_question_bank
from parsers.results_parser import parse_results, read_results_table

logger = logging.getLogger(__name__)


def load_results(uploaded_file) -> List[StudentResult]:
    return parse_results(read_results_table(uploaded_file.getvalue()))


def load_question_bank(uploaded_file) -> QuestionBank:
    try:
        data = uploaded_file.getvalue()
    except OSError as e:
        raise FileReadError(f"Could not read {uploaded_file.name}: {e}") from e
    return parse_question_bank(decode_question_bank(data))


def apply_results_upload(uploaded_file):
    """Replaces the student results with the content of a new upload."""
    if uploaded_file is None or st.session_state.results_file_id == uploaded_file.file_id:
        return

    try:
        students = load_results(uploaded_file)
    except QuizReviewError as e:
        logger.warning("Results upload %s rejected: %s", uploaded_file.name, e)
        st.error(f"Parsing error: {e}")
        return

    st.session_state.students = students
    st.session_state.results_file_id = uploaded_file.file_id
    # Row positions from the previous file mean nothing in the new one
    st.session_state.selected_student = None
    st.success(f"Loaded results for {len(students)} students from {uploaded_file.name}.")


def apply_question_bank_upload(uploaded_file):
    """Replaces the question bank with the content of a new upload."""
    if uploaded_file is None or st.session_state.bank_file_id == uploaded_file.file_id:
        return

    try:
        bank = load_question_bank(uploaded_file)
    except QuizReviewError as e:
        logger.warning("Question bank upload %s rejected: %s", uploaded_file.name, e)
        st.error(f"Error reading question bank: {e}")
        return

    st.session_state.question_bank = bank
    st.session_state.bank_file_id = uploaded_file.file_id
    st.success(f"Loaded {len(bank)} questions from {uploaded_file.name}.")


def select_student(index):
    st.session_state.selected_student = index


def resolve_selection(students, index) -> Optional[StudentResult]:
    """The selected student is stored as a row position in the current results."""
    if index is None or not 0 <= index < len(students):
        return None
    return students[index]


def clear_selected_student():
    st.session_state.selected_student = None


def clear_search():
    st.session_state.search_query = ""


def render_export_button(students: List[StudentResult]):
    st.download_button(
        "📥 Download wrong answers",
        data=wrong_answers_export(students).encode("utf-8"),
        file_name=EXPORT_FILE_NAME,
        mime="text/csv",
    )
