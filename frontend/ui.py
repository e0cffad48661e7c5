"""
Streamlit frontend.

Loads teacherData once per server process, renders the six filter controls
in a form and shows the matching records as a table.

    streamlit run frontend/ui.py
"""

import sys
from pathlib import Path

import streamlit as st

# Ensure project root is on sys.path when launched via `streamlit run`
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.app import load_snapshot, run_query
from app.settings import setup_logging
from search.options import filter_options
from search.records import FilterCriteria, PassComparison

setup_logging()

ANY = ""
RECENT_CHOICES = {"3": "Last 3 years", "5": "Last 5 years"}
COMPARISON_LABELS = {
    PassComparison.EQUAL:         "Equal to",
    PassComparison.GREATER:       "Greater than",
    PassComparison.GREATER_EQUAL: "Greater than or equal to",
    PassComparison.LESS:          "Less than",
    PassComparison.LESS_EQUAL:    "Less than or equal to",
}


@st.cache_resource
def _snapshot():
    return load_snapshot()


def _label(value: str) -> str:
    if value == ANY:
        return "All"
    return RECENT_CHOICES.get(value, value)


st.set_page_config(page_title="Teacher Performance", layout="wide")
st.title("Teacher Performance")

snapshot = _snapshot()
options = filter_options(snapshot)

with st.form("filters"):
    col1, col2, col3 = st.columns(3)
    academic_year = col1.selectbox(
        "Academic Year", [ANY, *RECENT_CHOICES, *options.academic_years], format_func=_label
    )
    btech_year = col2.selectbox("B. Tech. Year", [ANY, *options.btech_years], format_func=_label)
    semester = col3.selectbox("Semester", [ANY, *options.semesters], format_func=_label)

    col4, col5, col6 = st.columns(3)
    department = col4.selectbox("Department", [ANY, *options.sections], format_func=_label)
    pass_comparison = col5.selectbox(
        "% of Pass", list(PassComparison), format_func=COMPARISON_LABELS.get
    )
    pass_percentage = col6.text_input("Pass percentage", placeholder="e.g. 80")

    submitted = st.form_submit_button("Apply Filters")


if submitted:
    criteria = FilterCriteria.from_form(
        academic_year=academic_year,
        btech_year=btech_year,
        semester=semester,
        department=department,
        pass_comparison=pass_comparison.value,
        pass_percentage=pass_percentage,
    )
    view = run_query(snapshot, criteria)

    if view.empty:
        st.info(view.message)
    else:
        st.dataframe(view.rows, use_container_width=True, hide_index=True)
