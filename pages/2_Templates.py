import json

import streamlit as st

from core.timeutil import today_str, parse_date
from core.types import OwnerType
from services import templates_service
from services.templates_service import TemplateError
from services.workouts_service import ValidationError, WorkoutError
from ui.item_editor import render_items, render_add_exercises
from ui.session import get_session, display_in_lbs, render_countdown_sidebar

st.set_page_config(page_title="Templates", page_icon="📋", layout="wide")

from db.migrations import migrate
migrate()

session = get_session()
in_lbs = display_in_lbs()

st.title("Templates")

# --- Sidebar: Template List ---
st.sidebar.header("Templates")

with st.sidebar.expander("Create New Template"):
    new_template_name = st.text_input("Template Name")
    if st.button("Create"):
        try:
            st.session_state["selected_template_id"] = templates_service.create_template(new_template_name)
            st.rerun()
        except ValidationError as e:
            st.sidebar.error(str(e))

# --- Backup & Data ---
with st.sidebar.expander("Backup & Data"):
    st.write("Export your data to JSON.")
    from repos.backup_repo import export_data

    if st.button("Prepare Backup"):
        data = export_data()
        json_str = json.dumps(data, indent=2, default=str)
        st.download_button(
            label="⬇️ Download JSON",
            data=json_str,
            file_name="workout_log_backup.json",
            mime="application/json"
        )

templates = templates_service.get_all_templates()
template_ids = [t.id for t in templates]

if st.session_state.get("selected_template_id") not in template_ids:
    st.session_state["selected_template_id"] = template_ids[0] if template_ids else None

selected_template_id = st.sidebar.radio(
    "Select Template",
    options=template_ids,
    format_func=lambda x: next(
        (("⭐ " if t.is_favorite else "") + t.name for t in templates if t.id == x), "Unknown"
    ),
    key="selected_template_id"
)

if not selected_template_id:
    st.info("Create or select a template to get started.")
else:
    template = templates_service.get_template(selected_template_id)

    if not template:
        st.error("Template not found.")
    else:
        col1, col2 = st.columns([3, 1])
        with col1:
            # Use a unique key per template to avoid state bleeding
            new_name = st.text_input("Template Name", value=template.name, key=f"template_name_{template.id}")
            notes = st.text_area("Notes", value=template.notes or "", key=f"template_notes_{template.id}")
            favorite = st.checkbox("Favorite", value=template.is_favorite, key=f"template_fav_{template.id}")
            if ((new_name.strip() or template.name) != template.name
                    or (notes.strip() or None) != template.notes
                    or favorite != template.is_favorite):
                templates_service.update_template(template.id, new_name, notes, favorite)
                st.rerun()
        with col2:
            start_date = st.date_input("Workout date", value=parse_date(today_str()), key="tpl_start_date")
            if st.button("Start Workout", type="primary"):
                try:
                    workout_id = templates_service.instantiate_workout(
                        template.id, start_date.strftime("%Y-%m-%d")
                    )
                    st.session_state["selected_workout_id"] = workout_id
                    st.switch_page("pages/1_Workouts.py")
                except (WorkoutError, TemplateError) as e:
                    st.error(str(e))
            if st.button("Duplicate"):
                st.session_state["selected_template_id"] = templates_service.duplicate_template(template.id)
                st.rerun()
            if st.button("Delete Template"):
                templates_service.delete_template(template.id)
                st.rerun()

        st.divider()
        touch = lambda: templates_service.mark_updated(template.id)
        render_items(OwnerType.TEMPLATE, template, in_lbs, on_change=touch)
        st.divider()
        render_add_exercises(OwnerType.TEMPLATE, template.id, on_change=touch)

render_countdown_sidebar(session)
