import streamlit as st

from core.units import formatted_rest_time
from repos import settings_repo, workouts_repo
from repos.settings_repo import SettingsStore, DISPLAY_WEIGHT_IN_LBS
from services.session_service import WorkoutSession

SESSION_KEY = "workout_session"

def get_session():
    """One WorkoutSession per browser session, with current settings applied.

    A new browser session (reload, new tab) picks up the saved active session;
    later reruns catch the rest countdown up with the wall clock.
    """
    session = st.session_state.get(SESSION_KEY)
    if session is None:
        session = WorkoutSession(SettingsStore())
        st.session_state[SESSION_KEY] = session
        session.apply_settings(settings_repo.load_settings())
        session.restore(workouts_repo.get_workout)
    else:
        session.apply_settings(settings_repo.load_settings())
        session.resume()
    return session

def display_in_lbs():
    return settings_repo.get_bool(DISPLAY_WEIGHT_IN_LBS)

def render_countdown_sidebar(session):
    """Sidebar rendering of the rest countdown surface."""
    activity = session.activity
    content = activity.content
    if not activity.is_running or content is None:
        return
    with st.sidebar:
        st.markdown(f"#### ⏱️ {content.exercise}")
        st.caption(
            f"Set {content.set_for_current_exercise}/{content.sets_for_current_exercise}"
            f" · overall {content.set}/{content.total_sets}"
        )
        countdown = session.countdown
        if content.is_resting and countdown is not None and countdown.is_active:
            st.metric("Rest", countdown.display)
            st.progress(min(1.0, max(0.0, countdown.progress)))
        else:
            st.caption(f"Rest after set: {formatted_rest_time(content.rest_time)}")
        if content.next_exercise:
            st.caption(f"Next: {content.next_exercise} (Set {content.set_for_next_exercise})")
