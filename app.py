import logging

import streamlit as st

from point_potential.backend_logic import (
    describe_required_grade,
    project_final_grade,
    required_grade,
    summarize,
)
from point_potential.config import settings
from point_potential.io_csv import (
    parse_assignments,
    read_csv_upload,
    subjects_to_frame,
    summary_frame,
    validate_assignments_csv,
)
from point_potential.state import (
    add_assignment,
    add_subject,
    apply_input,
    clear_demo,
    initial_state,
    load_demo,
    remove_assignment,
    remove_subject,
    rename_subject,
    toggle_subject,
)
from point_potential.state_codec import QUERY_PARAM, build_share_link, decode_token, encode

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

# ------------------------
# Streamlit UI
# ------------------------

st.set_page_config(
    page_title=f"{settings.PAGE_TITLE} | Current Grade & Best Possible",
    page_icon="🎯",
    layout="wide",
)

# ---- State: restore from share link once per session, otherwise demo data ----
if "planner" not in st.session_state:
    shared = decode_token(st.query_params.get(QUERY_PARAM))
    st.session_state["planner"] = initial_state(shared)
if "input_errors" not in st.session_state:
    st.session_state["input_errors"] = {}

errors = st.session_state["input_errors"]


def _apply(error_key, operation, *args):
    try:
        st.session_state["planner"] = operation(st.session_state["planner"], *args)
        errors.pop(error_key, None)
    except ValueError as e:
        errors[error_key] = str(e)


def _on_assignment_input(subject_id, assignment_id, field, key):
    _apply(key, apply_input, subject_id, assignment_id, field, st.session_state[key])


def _on_subject_rename(subject_id, key):
    _apply(key, rename_subject, subject_id, st.session_state[key])


def _on_csv_import(subject_id, key):
    uploaded = st.session_state.get(key)
    if uploaded is None:
        errors[key] = "Choose a CSV file to import first."
        return
    try:
        assignments = parse_assignments(validate_assignments_csv(read_csv_upload(uploaded)))
    except Exception as e:
        logger.info(f"Rejected CSV upload for subject {subject_id}: {e}")
        errors[key] = f"CSV error: {e}"
        return

    planner = st.session_state["planner"]
    for assignment in assignments:
        planner = add_assignment(planner, subject_id, assignment)
    st.session_state["planner"] = planner
    errors.pop(key, None)


def _format_value(value):
    if value is None:
        return ""
    return f"{value:g}"


planner = st.session_state["planner"]

st.title(f"🎯 {settings.PAGE_TITLE}")
st.write(
    "Track weighted assignments for each subject, see your current grade and the best "
    "grade you can still reach, and work out what you need on the remaining work."
)

with st.expander("How to use", expanded=False):
    st.markdown(
        "1. Add the subjects you're taking\n"
        "2. For each subject, add all assignments that contribute to your final grade\n"
        "3. Enter the weight (percentage contribution) for each assignment - "
        "these must total 100%\n"
        "4. Enter grades for completed assignments to see your current total\n"
        "5. Your point potential shows the highest possible grade you can achieve"
    )

# ------------------------
# Demo data notice
# ------------------------

if planner.showing_demo:
    st.info(
        "This calculator is pre-populated with sample computer science subjects to "
        "demonstrate how it works. Clear the demo data to start adding your own subjects."
    )
    st.button("Clear Demo Data", on_click=_apply, args=("demo", clear_demo))
else:
    st.button("Load Demo Data", on_click=_apply, args=("demo", load_demo))

# ------------------------
# Add subject
# ------------------------

with st.form("add_subject_form", clear_on_submit=True):
    new_subject_name = st.text_input("Subject name", placeholder="Enter subject name")
    submitted = st.form_submit_button("Add Subject", type="primary")

if submitted:
    _apply("new_subject", add_subject, new_subject_name)
    if "new_subject" in errors:
        st.error(errors["new_subject"])

planner = st.session_state["planner"]

# ------------------------
# Subjects
# ------------------------

for subject in planner.subjects:
    summary = summarize(subject)
    is_expanded = subject.id in planner.expanded_ids

    with st.container(border=True):
        head, current_col, best_col, toggle_col = st.columns([6, 2, 2, 1])
        with head:
            prefix = "" if summary.is_weight_valid else "⚠️ "
            st.subheader(f"{prefix}{subject.name}")
        with current_col:
            st.metric("Current Grade", f"{summary.current_grade:.1f}%")
        with best_col:
            st.metric("Best Possible", f"{summary.best_possible:.1f}%")
        with toggle_col:
            st.button(
                "▲" if is_expanded else "▼",
                key=f"toggle_{subject.id}",
                on_click=_apply,
                args=(f"toggle_{subject.id}", toggle_subject, subject.id),
            )

        if not is_expanded:
            continue

        name_key = f"subject_name_{subject.id}"
        st.text_input(
            "Subject name",
            value=subject.name,
            key=name_key,
            on_change=_on_subject_rename,
            args=(subject.id, name_key),
        )
        if name_key in errors:
            st.error(errors[name_key])

        # ---- Assignment rows ----
        c_name, c_weight, c_grade, c_remove = st.columns([6, 2, 2, 1])
        c_name.markdown("**Assignment**")
        c_weight.markdown("**Weight (%)**")
        c_grade.markdown("**Grade (%)**")

        for assignment in subject.assignments:
            c_name, c_weight, c_grade, c_remove = st.columns([6, 2, 2, 1])
            values = {
                "name": assignment.name,
                "weight": _format_value(assignment.weight),
                "grade": _format_value(assignment.grade),
            }
            for column, field in zip((c_name, c_weight, c_grade), ("name", "weight", "grade")):
                key = f"{field}_{subject.id}_{assignment.id}"
                with column:
                    st.text_input(
                        field.capitalize(),
                        value=values[field],
                        key=key,
                        label_visibility="collapsed",
                        on_change=_on_assignment_input,
                        args=(subject.id, assignment.id, field, key),
                    )
                    if key in errors:
                        st.caption(f":red[{errors[key]}]")
            with c_remove:
                st.button(
                    "✕",
                    key=f"remove_{subject.id}_{assignment.id}",
                    on_click=_apply,
                    args=(None, remove_assignment, subject.id, assignment.id),
                )

        # ---- Summary ----
        if not summary.is_weight_valid:
            st.warning(
                "Assignment weights must total 100% for accurate grade calculations. "
                f"{summary.weight_validation_message}"
            )
        else:
            st.success(summary.weight_validation_message)

        st.markdown(
            f"You currently have **{summary.current_grade:.1f}%** in this subject  \n"
            f"Best possible grade: **{summary.best_possible:.1f}%**  \n"
            f"(Assuming perfect scores on remaining work worth "
            f"{summary.remaining_points:.1f}%)"
        )

        # ---- Target & required grade ----
        if summary.is_weight_valid and not summary.is_complete:
            target = st.number_input(
                "Target grade (%)",
                min_value=0.0,
                max_value=100.0,
                value=float(min(90.0, summary.best_possible)),
                step=0.5,
                key=f"target_{subject.id}",
            )
            needed = required_grade(summary.current_total, target, summary.remaining_weight)
            st.metric("Average needed on remaining work", describe_required_grade(needed))

            # ---- Scenario planner ----
            st.markdown("**Scenario planner:** set the grades you think you can achieve")
            default_grade = needed if needed is not None and needed <= 100 else 100.0
            planned = {}
            for assignment in subject.assignments:
                if assignment.is_graded:
                    continue
                planned[assignment.id] = st.slider(
                    f"{assignment.name} (weight: {assignment.weight:g}%)",
                    min_value=0.0,
                    max_value=100.0,
                    step=0.5,
                    value=float(round(default_grade * 2) / 2),
                    key=f"plan_{subject.id}_{assignment.id}",
                    format="%.1f",
                )

            projection = project_final_grade(subject, planned)
            if projection.current_total >= target:
                st.success(
                    f"✅ This plan finishes on **{projection.current_total:.1f}%**, "
                    f"meeting your target of {target:.1f}%."
                )
            else:
                st.error(
                    f"❌ This plan finishes on **{projection.current_total:.1f}%**, "
                    f"short of your target of {target:.1f}%."
                )
        elif summary.is_complete:
            st.info(f"Nothing left to earn. Final grade: {summary.current_grade:.1f}%")

        # ---- Actions ----
        csv_key = f"csv_{subject.id}"
        st.file_uploader(
            "Import assignments from CSV (Name, Weight, Grade)",
            type=["csv"],
            key=csv_key,
        )
        if csv_key in errors:
            st.error(errors[csv_key])

        a1, a2, a3 = st.columns([2, 2, 6])
        with a1:
            st.button(
                "Import CSV",
                key=f"import_{subject.id}",
                on_click=_on_csv_import,
                args=(subject.id, csv_key),
            )
        with a2:
            st.button(
                "Add Assignment",
                key=f"add_{subject.id}",
                on_click=_apply,
                args=(None, add_assignment, subject.id),
            )
        with a3:
            st.button(
                "Delete Subject",
                key=f"delete_{subject.id}",
                on_click=_apply,
                args=(None, remove_subject, subject.id),
            )

# ------------------------
# Overview & share link
# ------------------------

if planner.subjects:
    st.markdown("---")
    st.subheader("Overview")
    st.dataframe(
        summary_frame(planner.subjects),
        hide_index=True,
        use_container_width=True,
        column_config={
            "Current Grade": st.column_config.NumberColumn("Current Grade", format="%.1f%%"),
            "Best Possible": st.column_config.NumberColumn("Best Possible", format="%.1f%%"),
            "Remaining Weight": st.column_config.NumberColumn("Remaining Weight", format="%.1f%%"),
            "Total Weight": st.column_config.NumberColumn("Total Weight", format="%.1f%%"),
        },
    )
    st.download_button(
        "Download CSV",
        subjects_to_frame(planner.subjects).to_csv(index=False),
        file_name="grades.csv",
        mime="text/csv",
    )

    st.subheader("🔗 Share Your Calculations")
    st.write("Copy this link to access your calculations from any device or share with others:")
    st.code(build_share_link(settings.SHARE_BASE_URL, planner.subjects), language=None)
    st.query_params[QUERY_PARAM] = encode(planner.subjects)
else:
    if QUERY_PARAM in st.query_params:
        del st.query_params[QUERY_PARAM]
    st.info("Add a subject above to get started.")


st.header("FAQ")

st.subheader("What data do you collect or store?")
st.write(
    "This tool does **not** store your data on a server. "
    "Everything you enter lives in your browser session; the share link carries a copy "
    "of your subjects inside the link itself."
)

st.subheader("Why are my grades showing 0%?")
st.write(
    "Grades are only calculated once a subject's assignment weights total 100%. "
    "Check the weight message under the subject."
)

# To run:
# streamlit run app.py
