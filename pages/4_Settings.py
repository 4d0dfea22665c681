import streamlit as st

from repos import settings_repo
from repos.settings_repo import (
    DISPLAY_WEIGHT_IN_LBS, ALLOW_MULTIPLE_WORKOUTS_PER_DAY, SHOW_LAST_SET_REST_TIME, USER_ACCENT_COLOR,
)
from ui.session import get_session, render_countdown_sidebar

st.set_page_config(page_title="Settings", page_icon="⚙️", layout="wide")

from db.migrations import migrate
migrate()

st.title("Settings")

settings = settings_repo.load_settings()

lbs = st.toggle("Display weight in lbs", value=settings[DISPLAY_WEIGHT_IN_LBS])
multiple = st.toggle("Allow multiple workouts per day", value=settings[ALLOW_MULTIPLE_WORKOUTS_PER_DAY])
last_rest = st.toggle("Rest after the last set of an exercise", value=settings[SHOW_LAST_SET_REST_TIME])
accent = st.color_picker("Accent colour", value=settings[USER_ACCENT_COLOR])

if lbs != settings[DISPLAY_WEIGHT_IN_LBS]:
    settings_repo.set_bool(DISPLAY_WEIGHT_IN_LBS, lbs)
if multiple != settings[ALLOW_MULTIPLE_WORKOUTS_PER_DAY]:
    settings_repo.set_bool(ALLOW_MULTIPLE_WORKOUTS_PER_DAY, multiple)
if last_rest != settings[SHOW_LAST_SET_REST_TIME]:
    settings_repo.set_bool(SHOW_LAST_SET_REST_TIME, last_rest)
if accent != settings[USER_ACCENT_COLOR]:
    settings_repo.set_setting(USER_ACCENT_COLOR, accent)

# Picks up the values just saved
session = get_session()
render_countdown_sidebar(session)
