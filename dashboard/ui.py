"""
UI
==

This module implements the dashboard UI.
"""
import plotly.express as px

from analytics.metrics import (format_score, question_lookup, question_miss_counts,
                               search_filter, summary_frame)
from config import PAGE_TITLE, QUESTION_BANK_FILE_TYPES, RESULTS_FILE_TYPES
from dashboard.data_management import *


def initialize_session_state():
    """Initializes page config and session variables."""
    st.set_page_config(page_title=PAGE_TITLE, layout="wide")

    if 'students' not in st.session_state:
        st.session_state.students = None
    if 'question_bank' not in st.session_state:
        st.session_state.question_bank = None
    if 'results_file_id' not in st.session_state:
        st.session_state.results_file_id = None
    if 'bank_file_id' not in st.session_state:
        st.session_state.bank_file_id = None
    if 'selected_student' not in st.session_state:
        st.session_state.selected_student = None
    if 'search_query' not in st.session_state:
        st.session_state.search_query = ""


def render_sidebar():
    with st.sidebar:
        st.title("📝 Quiz Review")
        st.header("Files")
        results_file = st.file_uploader("Quiz results", type=RESULTS_FILE_TYPES)
        apply_results_upload(results_file)

        bank_file = st.file_uploader("Question bank (optional)", type=QUESTION_BANK_FILE_TYPES)
        apply_question_bank_upload(bank_file)

        st.divider()
        st.subheader("View")
        st.button("✖️ Clear selected student", on_click=clear_selected_student)
        st.button("🔄 Clear search", on_click=clear_search)

        if st.session_state.students:
            st.divider()
            st.subheader("Export")
            render_export_button(st.session_state.students)


def render_top_indicators(students, bank):
    """Renders top indicators."""
    with st.container():
        c1, c2, c3 = st.columns(3)
        c1.metric("Students", len(students))
        scores = summary_frame(students)["Score (%)"].dropna()
        c2.metric("Avg Score", f"{scores.mean():.1f}%" if not scores.empty else "")
        c3.metric("Questions in Bank", len(bank) if bank else 0)


def render_question(label, bank, is_wrong):
    marker = "🔴" if is_wrong else "🟢"
    question = question_lookup(bank, label)
    if question is None:
        st.markdown(f"{marker} **Question {label}**")
        return

    with st.expander(f"{marker} Question {label}: {question.text}", expanded=is_wrong):
        for option in question.options:
            st.text(option)
        if question.correct_answer:
            st.caption(f"Correct answer: {question.correct_answer}")


def render_student_detail(student, bank):
    st.subheader(student.name or "(no name)")
    c1, c2, c3 = st.columns(3)
    c1.metric("Score", format_score(student))
    c2.metric("Correct", len(student.correct_answers))
    c3.metric("Wrong", len(student.wrong_answers))

    st.markdown("#### Wrongly answered")
    if not student.wrong_answers:
        st.success("No wrong answers!")
    for label in student.wrong_answers:
        render_question(label, bank, is_wrong=True)

    with st.expander("Correctly answered", expanded=False):
        for label in student.correct_answers:
            render_question(label, bank, is_wrong=False)


def render_search(students):
    st.text_input("🔍 Search student", key="search_query")
    matches = search_filter(students, st.session_state.search_query)

    if st.session_state.search_query.strip() and not matches:
        st.info("No student matches this search.")

    # Buttons carry the row position; names can repeat or be empty
    matched = {id(s) for s in matches}
    for idx, student in enumerate(students):
        if id(student) not in matched:
            continue
        st.button(
            f"{student.name or '(no name)'}  ({format_score(student)})",
            key=f"select_student_{idx}",
            on_click=select_student,
            args=(idx,),
        )


def build_score_table(students):
    """Score table with the default row index, so repeated names stay stylable."""
    return summary_frame(students).style.background_gradient(
        cmap="RdYlGn", vmin=0, vmax=100, subset=["Score (%)"]
    )


def render_class_overview(students):
    st.divider()
    st.header("📊 Class Overview")

    misses = question_miss_counts(students)
    if misses.empty:
        st.success("Nobody answered a question wrongly!")
    else:
        st.subheader("Most Missed Questions")
        fig = px.bar(
            x=misses.index,
            y=misses.values,
            labels={"x": "Question", "y": "Students"},
            color_discrete_sequence=["#d62728"],
        )
        fig.update_layout(xaxis={'type': 'category'}, height=300,
                          margin=dict(l=10, r=10, t=10, b=10))
        st.plotly_chart(fig, width="stretch", key="plot_missed_questions")

    st.subheader("Scores (%)")
    st.dataframe(build_score_table(students), hide_index=True, width="stretch")


def run_dashboard():
    initialize_session_state()
    render_sidebar()

    students = st.session_state.students
    bank = st.session_state.question_bank

    if isinstance(students, list) and students:
        render_top_indicators(students, bank)

        search_col, detail_col = st.columns([1, 2])
        with search_col:
            render_search(students)
        with detail_col:
            selected = resolve_selection(students, st.session_state.selected_student)
            if selected is not None:
                render_student_detail(selected, bank)
            else:
                st.info("Search for a student and select them to see their answers.")

        render_class_overview(students)
    elif isinstance(students, list):
        st.warning("The uploaded results file has no student rows.")
    else:
        st.info("Please upload a quiz results file in the sidebar.")
