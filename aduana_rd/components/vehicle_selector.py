import streamlit as st

from aduana_rd.exceptions import SelectionError
from aduana_rd.models.import_models import SELECTION_FIELDS

SELECTORS = {
    "marca": ("🏭", "Marca del Vehículo", "Selecciona la marca..."),
    "modelo": ("🚙", "Modelo", "Selecciona el modelo..."),
    "especificacion": ("⚙️", "Especificación/Submodelo", "Selecciona la especificación..."),
    "ano": ("📅", "Año de Fabricación", "Selecciona el año..."),
    "pais": ("🌍", "País de Fabricación", "Selecciona el país..."),
}

def _on_select(field):
    """Push the widget value into the form and clear the dependent widgets"""
    controller = st.session_state.controller
    value = st.session_state.get(f"sel_{field}", "")
    try:
        controller.select(field, value)
    except SelectionError as e:
        st.session_state.selection_error = str(e)
        return
    for dependent in SELECTION_FIELDS[SELECTION_FIELDS.index(field) + 1:]:
        st.session_state[f"sel_{dependent}"] = ""

def render_vehicle_selector(field, options, disabled=False):
    """Render one searchable selector; the empty option shows the placeholder"""
    icon, label, placeholder = SELECTORS[field]
    choices = [""] + [str(option) for option in options]

    current = st.session_state.controller.form.get(field)
    if current and current not in choices:
        choices.append(current)

    return st.selectbox(
        f"{icon} {label}",
        options=choices,
        format_func=lambda value: placeholder if value == "" else value,
        disabled=disabled,
        key=f"sel_{field}",
        on_change=_on_select,
        args=(field,)
    )

def render_vehicle_selectors():
    """Render the five dependent selectors in two columns"""
    controller = st.session_state.controller
    form = controller.form

    col1, col2 = st.columns(2)
    columns = [col1, col2, col1, col2, col1]

    for index, field in enumerate(SELECTION_FIELDS):
        prefix_ready = all(form.get(name) for name in SELECTION_FIELDS[:index])
        with columns[index]:
            with st.spinner(f"Cargando {field}..."):
                options = controller.options_for(field) if prefix_ready else []
            render_vehicle_selector(field, options, disabled=not prefix_ready or form.calculation_done)

    error = st.session_state.pop('selection_error', None)
    if error:
        st.error(error)
