import altair as alt
import pandas as pd
import streamlit as st

from core.types import MuscleGroup
from core.units import weight_value, weight_unit
from services import exercises_service, analytics_service
from services.analytics_service import Period
from services.workouts_service import ValidationError
from ui.session import get_session, display_in_lbs, render_countdown_sidebar

st.set_page_config(page_title="Exercises", page_icon="💪", layout="wide")

from db.migrations import migrate
migrate()

session = get_session()
in_lbs = display_in_lbs()
muscle_groups = [m.value for m in MuscleGroup]

st.title("Exercises")

tab_library, tab_analytics = st.tabs(["Library", "Analytics"])

with tab_library:
    with st.expander("Create Exercise"):
        new_name = st.text_input("Name", key="new_ex_name")
        new_group = st.selectbox("Muscle Group", muscle_groups, index=muscle_groups.index("other"),
                                 key="new_ex_group")
        new_notes = st.text_area("Notes", key="new_ex_notes")
        if st.button("Create Exercise"):
            try:
                if exercises_service.create_exercise(new_name, new_group, new_notes):
                    st.rerun()
                st.warning("Name required")
            except ValidationError as e:
                st.error(str(e))

    search = st.text_input("Search", placeholder="Search exercises")
    definitions = exercises_service.search_exercises(search)
    if not definitions:
        st.caption("No exercises found.")

    for d in definitions:
        with st.expander(("⭐ " if d.favorite else "") + d.name):
            c1, c2 = st.columns([3, 1])
            with c1:
                name = st.text_input("Name", value=d.name, key=f"ex_name_{d.id}")
                group = st.selectbox(
                    "Muscle Group", muscle_groups,
                    index=muscle_groups.index(d.muscle_group) if d.muscle_group in muscle_groups else 0,
                    key=f"ex_group_{d.id}",
                )
                notes = st.text_area("Notes", value=d.notes or "", key=f"ex_notes_{d.id}")
                favorite = st.checkbox("Favorite", value=d.favorite, key=f"ex_fav_{d.id}")
                if st.button("Save", key=f"ex_save_{d.id}"):
                    try:
                        exercises_service.update_exercise(d.id, name, group, notes, favorite)
                        st.rerun()
                    except ValidationError as e:
                        st.error(str(e))
            with c2:
                st.write("")
                confirm = st.checkbox("Also deletes every logged instance", key=f"ex_confirm_{d.id}")
                if st.button("Delete", key=f"ex_del_{d.id}", type="primary", disabled=not confirm):
                    exercises_service.delete_exercise(d.id)
                    st.rerun()

with tab_analytics:
    all_definitions = exercises_service.search_exercises()
    if not all_definitions:
        st.info("Select an exercise")
    else:
        picked = st.selectbox(
            "Exercise", options=[d.id for d in all_definitions],
            format_func=lambda x: next(d.name for d in all_definitions if d.id == x),
        )
        period = Period(st.radio("Period", [p.value for p in Period], horizontal=True))
        points = analytics_service.performance_points(picked, period)

        if not points:
            st.info("No data")
        else:
            unit = weight_unit(in_lbs)
            df = pd.DataFrame({
                "date": pd.to_datetime([p.date for p in points]),
                "weight": [weight_value(p.weight, in_lbs) for p in points],
                "reps": [p.reps for p in points],
            })
            low, high = analytics_service.y_domain(points, in_lbs)
            chart = alt.Chart(df).mark_line(point=True).encode(
                x=alt.X("date:T", title="Date"),
                y=alt.Y("weight:Q", title=f"Max weight ({unit})", scale=alt.Scale(domain=[low, high])),
                tooltip=[alt.Tooltip("date:T", format="%Y-%m-%d"), "weight:Q", "reps:Q"],
            )
            st.altair_chart(chart, use_container_width=True)

            change = analytics_service.percent_change(points)
            if change is not None:
                arrow = "⬆️" if change >= 0 else "⬇️"
                st.markdown(f"{arrow} **{change:+.1f}%** change in max weight")

render_countdown_sidebar(session)
