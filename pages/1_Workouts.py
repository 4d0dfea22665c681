import streamlit as st

from core.timeutil import today_str, smart_date_label, parse_date
from core.types import OwnerType
from services import workouts_service, templates_service
from services.workouts_service import ValidationError, WorkoutError
from ui.item_editor import render_items, render_add_exercises
from ui.session import get_session, display_in_lbs, render_countdown_sidebar

st.set_page_config(page_title="Workouts", page_icon="🏋️", layout="wide")

from db.migrations import migrate
migrate()

session = get_session()
in_lbs = display_in_lbs()

st.title("Workouts")

# --- Sidebar: Workout List ---
st.sidebar.header("Workouts")

with st.sidebar.expander("New Workout"):
    new_date = st.date_input("Date", value=parse_date(today_str()))
    new_name = st.text_input("Name (optional)")
    if st.button("Create"):
        try:
            new_id = workouts_service.create_workout(new_date.strftime("%Y-%m-%d"), new_name)
            st.session_state["selected_workout_id"] = new_id
            st.rerun()
        except WorkoutError as e:
            st.sidebar.error(str(e))

workouts = workouts_service.get_all_workouts()
workout_ids = [w.id for w in workouts]

# Ensure selected_workout_id is in options, otherwise default to newest
if st.session_state.get("selected_workout_id") not in workout_ids:
    st.session_state["selected_workout_id"] = workout_ids[0] if workout_ids else None

today = today_str()

def _label(workout_id):
    w = next((w for w in workouts if w.id == workout_id), None)
    if w is None:
        return "Unknown"
    label = smart_date_label(w.date, today)
    return f"{label} · {w.name}" if w.name else label

selected_id = st.sidebar.radio(
    "Select Workout",
    options=workout_ids,
    format_func=_label,
    key="selected_workout_id",
)

if not selected_id:
    st.info("Create a workout to get started.")
else:
    workout = workouts_service.get_workout(selected_id)
    if not workout:
        st.error("Workout not found.")
    else:
        st.subheader(smart_date_label(workout.date, today))

        col1, col2, col3, col4 = st.columns([3, 1, 1, 1])
        with col1:
            name = st.text_input("Workout Name", value=workout.name or "", key=f"workout_name_{workout.id}")
            if name.strip() != (workout.name or ""):
                workouts_service.rename_workout(workout.id, name)
                st.rerun()
        with col2:
            st.write("")
            if st.button("Copy to Today"):
                try:
                    st.session_state["selected_workout_id"] = workouts_service.copy_workout_to_today(workout.id)
                    st.rerun()
                except WorkoutError as e:
                    st.error(str(e))
        with col3:
            st.write("")
            if st.button("Start", disabled=session.is_active):
                session.start(workout)
                st.switch_page("app.py")
        with col4:
            st.write("")
            if st.button("Delete Workout", type="primary"):
                if session.is_active and session.workout.id == workout.id:
                    session.stop()
                workouts_service.delete_workout(workout.id)
                st.rerun()

        with st.expander("Save as Template"):
            template_name = st.text_input("Template Name", value=workout.name or "", key="tpl_from_workout")
            if st.button("Save Template"):
                try:
                    templates_service.create_template_from_workout(workout.id, template_name)
                    st.success("Template saved.")
                except (ValidationError, templates_service.TemplateError) as e:
                    st.error(str(e))

        st.divider()
        render_items(OwnerType.WORKOUT, workout, in_lbs)
        st.divider()
        render_add_exercises(OwnerType.WORKOUT, workout.id)

render_countdown_sidebar(session)
