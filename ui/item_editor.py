"""Item list editor shared by the Workouts and Templates pages."""
import streamlit as st

from core.types import ItemKind
from core.units import formatted_rest_time, weight_value, weight_to_kg, weight_unit
from services import workouts_service, exercises_service
from services.workouts_service import ValidationError


def _weight_step(in_lbs):
    return 5.0 if in_lbs else 2.5


def _changed(on_change):
    if on_change:
        on_change()
    st.rerun()


def render_sets(exercise, in_lbs, on_change=None):
    unit = weight_unit(in_lbs)
    if not exercise.sets:
        st.caption("No sets yet.")

    for s in exercise.ordered_sets():
        sc1, sc2, sc3, sc4 = st.columns([1, 2, 2, 1])
        with sc1:
            st.write(f"Set {s.order + 1}")
        with sc2:
            reps = st.number_input("Reps", min_value=1, value=max(1, s.reps), key=f"reps_{s.id}")
        with sc3:
            shown = round(weight_value(s.weight, in_lbs), 1)
            weight = st.number_input(
                f"Weight ({unit})", min_value=0.0, value=float(shown),
                step=_weight_step(in_lbs), key=f"weight_{s.id}_{unit}",
            )
        with sc4:
            if st.button("❌", key=f"del_set_{s.id}"):
                workouts_service.delete_set(s.id)
                _changed(on_change)

        # Auto-save on change (Streamlit reruns on input change)
        weight = round(weight, 1)
        if reps != s.reps or weight != shown:
            try:
                workouts_service.update_set(s.id, reps, weight_to_kg(weight, in_lbs))
                _changed(on_change)
            except ValidationError as e:
                st.error(str(e))

    if st.button("➕ Add Set", key=f"add_set_{exercise.id}"):
        last = exercise.ordered_sets()[-1] if exercise.sets else None
        workouts_service.add_set(exercise.id, last.reps if last else 10, last.weight if last else 0.0)
        _changed(on_change)


def render_rest_input(label, current, key):
    return st.number_input(
        label, min_value=0, value=int(current), step=15, key=key,
        help=formatted_rest_time(current),
    )


def render_exercise(exercise, in_lbs, on_change=None, in_superset=False):
    rest = render_rest_input("Rest (seconds)", exercise.rest_time, f"rest_ex_{exercise.id}")
    if rest != exercise.rest_time:
        workouts_service.update_exercise(exercise.id, rest, exercise.notes)
        _changed(on_change)
    render_sets(exercise, in_lbs, on_change)
    if in_superset and st.button("Remove from superset", key=f"rm_ex_{exercise.id}"):
        workouts_service.remove_exercise(exercise.id)
        _changed(on_change)


def render_items(owner_type, owner, in_lbs, on_change=None):
    """Renders the ordered items of a workout or template with edit controls."""
    items = owner.ordered_items()
    item_ids = [item.id for item in items]

    if not items:
        st.info("No exercises yet.")

    for i, item in enumerate(items):
        if item.kind == ItemKind.SUPERSET:
            names = ", ".join(ex.name for ex in item.superset.ordered_exercises())
            title = f"{i + 1}. Superset: {names}"
        else:
            title = f"{i + 1}. {item.exercise.name}"

        with st.expander(title, expanded=True):
            c1, c2, c3, c4 = st.columns([1, 1, 4, 1])
            with c1:
                if i > 0 and st.button("⬆️", key=f"up_{item.id}"):
                    workouts_service.move_item(owner_type, owner.id, item_ids, i, -1)
                    _changed(on_change)
            with c2:
                if i < len(items) - 1 and st.button("⬇️", key=f"down_{item.id}"):
                    workouts_service.move_item(owner_type, owner.id, item_ids, i, 1)
                    _changed(on_change)
            with c4:
                if st.button("Remove", key=f"remove_{item.id}", type="primary"):
                    workouts_service.delete_item(item.id)
                    _changed(on_change)

            if item.kind == ItemKind.EXERCISE:
                render_exercise(item.exercise, in_lbs, on_change)
                continue

            superset = item.superset
            rest = render_rest_input("Rest after each round (seconds)", superset.rest_time,
                                     f"rest_ss_{superset.id}")
            if rest != superset.rest_time:
                workouts_service.update_superset(superset.id, rest, superset.notes)
                _changed(on_change)
            for ex in superset.ordered_exercises():
                st.markdown(f"**{ex.name}**")
                render_exercise(ex, in_lbs, on_change, in_superset=True)

            definitions = exercises_service.search_exercises()
            if definitions:
                ac1, ac2 = st.columns([3, 1])
                with ac1:
                    picked = st.selectbox(
                        "Add to superset", options=[d.id for d in definitions],
                        format_func=lambda x: next(d.name for d in definitions if d.id == x),
                        key=f"ss_add_pick_{superset.id}",
                    )
                with ac2:
                    st.write("")
                    if st.button("Add", key=f"ss_add_{superset.id}"):
                        workouts_service.add_exercise_to_superset(superset.id, picked)
                        _changed(on_change)


def render_add_exercises(owner_type, owner_id, on_change=None):
    """Picker adding definitions as single exercises or as one new superset."""
    st.subheader("Add Exercises")
    definitions = exercises_service.search_exercises()
    if not definitions:
        st.caption("Create exercises on the Exercises page first.")
        return

    picked = st.multiselect(
        "Exercises", options=[d.id for d in definitions],
        format_func=lambda x: next(d.name for d in definitions if d.id == x),
        key=f"add_pick_{owner_type.value}_{owner_id}",
    )
    as_superset = st.checkbox(
        "Add as superset", disabled=len(picked) < 2, key=f"add_ss_{owner_type.value}_{owner_id}"
    )
    if st.button("Add", key=f"add_btn_{owner_type.value}_{owner_id}", disabled=not picked):
        try:
            workouts_service.add_exercises(owner_type, owner_id, picked, as_superset=as_superset)
            _changed(on_change)
        except ValidationError as e:
            st.error(str(e))
