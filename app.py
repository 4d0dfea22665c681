import logging

import streamlit as st

from core.config import get_config
from core.timeutil import today_str, parse_date
from core.units import formatted_weight, formatted_rest_time
from repos import workouts_repo
from services import workouts_service
from services.workouts_service import WorkoutError
from ui.session import get_session, display_in_lbs, render_countdown_sidebar

logging.basicConfig(
    level=get_config("LOG_LEVEL", "INFO"),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

st.set_page_config(
    page_title="Workout Log",
    page_icon="💪",
    layout="wide"
)

# Run migrations
from db.migrations import migrate
migrate()

session = get_session()
in_lbs = display_in_lbs()
today = today_str()

display_date = parse_date(today).strftime("%A, %b %d")

st.title(f"Today: {display_date}")


@st.fragment(run_every=1)
def rest_ticker():
    """Drives the rest countdown once a second and shows due reminders."""
    was_resting = session.is_resting
    for reminder in session.tick():
        st.toast(f"**{reminder.title}** {reminder.body}", icon="⏰")
    countdown = session.countdown
    if session.is_resting and countdown is not None:
        st.metric("Rest", countdown.display)
        st.progress(min(1.0, max(0.0, countdown.progress)))
    if was_resting and not session.is_resting:
        st.rerun(scope="app")


def render_runner():
    workout = workouts_repo.get_workout(session.workout.id)
    if workout is None:
        session.stop()
        st.rerun()
    session.refresh(workout)

    done, total = session.progress()
    st.info(f"⚡ Active Session: {workout.name or 'Workout'} ({done}/{total} sets)")

    if session.is_complete:
        st.success("🎉 Workout Completed! Great job.")
        st.balloons()
        if st.button("Finish", type="primary"):
            session.stop()
            st.rerun()
        return

    slot = session.current_slot()
    if slot is None:
        st.warning("This workout has no sets yet.")
        if st.button("End Session"):
            session.stop()
            st.rerun()
        return

    with st.container():
        st.markdown(f"### {slot.exercise_name}")
        label = f"Set {slot.set_index + 1} of {len(slot.exercise.sets)}"
        if slot.is_superset:
            label += " · superset"
        st.caption(label)
        st.markdown(f"**Target**: {slot.set.reps} x {formatted_weight(slot.set.weight, in_lbs)}")

        if session.is_resting:
            rest_ticker()
            if st.button("Skip Rest", type="primary", use_container_width=True):
                session.skip_rest()
                st.rerun()
        else:
            rest = session.sequencer.rest_owed_after(slot)
            if rest:
                st.caption(f"Rest afterwards: {formatted_rest_time(rest)}")
            if st.button("✅ Set Done", type="primary", use_container_width=True):
                session.done_set()
                st.rerun()

    c1, c2, c3 = st.columns(3)
    with c1:
        if st.button("⬅️ Previous Set", use_container_width=True):
            session.previous_set()
            st.rerun()
    with c2:
        if st.button("Next Set ➡️", use_container_width=True):
            session.next_set()
            st.rerun()
    with c3:
        if st.button("End Session", use_container_width=True):
            session.stop()
            st.rerun()

    nxt = session.next_slot()
    if nxt is not None:
        st.caption(f"Up next: {nxt.exercise_name}, set {nxt.set_index + 1}"
                   f" ({nxt.set.reps} x {formatted_weight(nxt.set.weight, in_lbs)})")


if session.is_active:
    render_runner()
else:
    workouts = workouts_repo.get_workouts_on(today)
    if not workouts:
        st.info("No workout logged today. Start one here or from a template.")
        if st.button("New Workout", type="primary"):
            try:
                workouts_service.create_workout(today)
                st.rerun()
            except WorkoutError as e:
                st.error(str(e))

    for workout in workouts:
        full = workouts_repo.get_workout(workout.id)
        with st.expander(f"🏋️ {full.name or 'Workout'}", expanded=True):
            for i, item in enumerate(full.ordered_items()):
                names = ", ".join(ex.name for ex in item.exercises())
                sets = sum(len(ex.sets) for ex in item.exercises())
                st.write(f"{i + 1}. {names} ({sets} sets)")
            if st.button("Start Workout", type="primary", key=f"start_{full.id}"):
                session.start(full)
                st.rerun()

render_countdown_sidebar(session)
