"""
Tests for upload handling and student selection in the dashboard.
Streamlit is replaced by a small recorder so no app runtime is needed.
"""

from types import SimpleNamespace

import pytest

import dashboard.data_management as data_management
from dashboard.data_management import (
    apply_question_bank_upload,
    apply_results_upload,
    resolve_selection,
    select_student,
)
from dashboard.ui import build_score_table
from models.quiz_models import StudentResult


class FakeStreamlit:
    def __init__(self):
        self.session_state = SimpleNamespace(
            students=None,
            question_bank=None,
            results_file_id=None,
            bank_file_id=None,
            selected_student=None,
            search_query="",
        )
        self.errors = []
        self.successes = []

    def error(self, message):
        self.errors.append(message)

    def success(self, message):
        self.successes.append(message)


class FakeUpload:
    def __init__(self, file_id, data, name="upload"):
        self.file_id = file_id
        self.name = name
        self.data = data
        self.reads = 0

    def getvalue(self):
        self.reads += 1
        return self.data


@pytest.fixture
def fake_st(monkeypatch):
    fake = FakeStreamlit()
    monkeypatch.setattr(data_management, "st", fake)
    return fake


class TestResultsUpload:
    def test_good_upload_installs_students(self, fake_st, moodle_export_bytes):
        apply_results_upload(FakeUpload("f1", moodle_export_bytes))

        assert [s.name for s in fake_st.session_state.students] == ["Ann Lee", "Bruno Silva", "Carla Kim"]
        assert fake_st.session_state.results_file_id == "f1"
        assert fake_st.errors == []

    def test_failed_upload_keeps_previous_state(self, fake_st, moodle_export_bytes):
        apply_results_upload(FakeUpload("f1", moodle_export_bytes))
        before = fake_st.session_state.students

        apply_results_upload(FakeUpload("f2", b"\xff\xfe\xfa,\x81\n"))

        assert fake_st.session_state.students is before
        assert fake_st.session_state.results_file_id == "f1"
        assert len(fake_st.errors) == 1

    def test_same_file_is_not_parsed_again(self, fake_st, moodle_export_bytes):
        upload = FakeUpload("f1", moodle_export_bytes)
        apply_results_upload(upload)
        apply_results_upload(upload)

        assert upload.reads == 1
        assert len(fake_st.successes) == 1

    def test_new_results_clear_the_selection(self, fake_st, moodle_export_bytes):
        apply_results_upload(FakeUpload("f1", moodle_export_bytes))
        select_student(2)

        apply_results_upload(FakeUpload("f2", b"First name,Surname,Q. 1 /1\nAnn,Lee,0\n"))

        assert fake_st.session_state.selected_student is None
        assert len(fake_st.session_state.students) == 1

    def test_no_upload_is_a_no_op(self, fake_st):
        apply_results_upload(None)
        assert fake_st.session_state.students is None


class TestQuestionBankUpload:
    def test_failed_upload_keeps_previous_bank(self, fake_st, aiken_bank_text):
        apply_question_bank_upload(FakeUpload("b1", aiken_bank_text.encode("utf-8")))
        before = fake_st.session_state.question_bank

        apply_question_bank_upload(FakeUpload("b2", b"\xff\xfe\xfa"))

        assert fake_st.session_state.question_bank is before
        assert len(before) == 3
        assert fake_st.session_state.bank_file_id == "b1"
        assert len(fake_st.errors) == 1


class TestSelection:
    @pytest.fixture
    def twins(self):
        return [
            StudentResult("Ann Lee", correct_answers=["1"], wrong_answers=[]),
            StudentResult("Ann Lee", correct_answers=[], wrong_answers=["1"]),
        ]

    def test_same_name_resolves_by_position(self, twins):
        assert resolve_selection(twins, 1) is twins[1]
        assert resolve_selection(twins, 0) is twins[0]

    def test_stale_or_missing_selection(self, twins):
        assert resolve_selection(twins, None) is None
        assert resolve_selection(twins, 2) is None
        assert resolve_selection(twins, -1) is None


class TestScoreTable:
    def test_repeated_and_empty_names_render(self):
        students = [
            StudentResult("", correct_answers=["1"], wrong_answers=["2"]),
            StudentResult("", correct_answers=[], wrong_answers=["1", "2"]),
            StudentResult("Ann Lee", correct_answers=["1", "2"]),
            StudentResult("Ann Lee"),
        ]
        html = build_score_table(students).to_html()

        assert "Ann Lee" in html
        assert "50.0" in html
