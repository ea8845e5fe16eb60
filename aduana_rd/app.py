import streamlit as st
from datetime import date
from loguru import logger

# FIRST: Set page config before any other Streamlit commands
st.set_page_config(
    page_title="Calculadora Impuestos de Vehículos - RD",
    page_icon="🚗",
    layout="centered"
)

st.markdown("""
<style>
    .stApp {
        background: linear-gradient(135deg, #e8f5e9 0%, #c8e6c9 100%);
        color: #333;
    }

    .main .block-container {
        background: rgba(255, 255, 255, 0.92);
        color: #1a202c;
        border-radius: 15px;
        padding: 2rem;
        margin-top: 1rem;
        box-shadow: 0 10px 30px rgba(0, 0, 0, 0.1);
    }

    h1, h2, h3 {
        color: #1b5e20 !important;
        font-weight: 600;
    }

    .stButton > button {
        background: linear-gradient(45deg, #2e7d32, #43a047);
        color: white;
        border: none;
        border-radius: 8px;
        padding: 0.5rem 1.5rem;
        font-weight: 600;
    }

    .stButton > button:disabled {
        opacity: 0.5;
    }
</style>
""", unsafe_allow_html=True)

from aduana_rd.exceptions import AduanaError, ConfigurationError
from aduana_rd.utils.logging_utils import setup_logger, log_system_startup, log_system_error
from aduana_rd.components.session_manager import initialize_session_state, reset_search
from aduana_rd.components.vehicle_selector import render_vehicle_selectors
from aduana_rd.components.results_display import render_calculation_results
from aduana_rd.components.drcafta_panel import render_drcafta_panel
from aduana_rd.components.disclaimer import render_disclaimer
from aduana_rd.utils.formatters import validate_amount

@st.cache_resource
def initialize_logging():
    """Initialize logging for the Streamlit application."""
    try:
        setup_logger("streamlit_app")
        log_system_startup("Streamlit Vehicle Import Calculator")
        return True
    except Exception as e:
        st.error(f"Failed to setup logging: {e}")
        return False

def render_header():
    st.title("🚗 Calculadora Impuestos de Vehículos 🧮")
    st.caption("República Dominicana - Cálculo de aranceles e impuestos")

    info = st.session_state.controller.rate_service.get_rate_info()
    if info.rate:
        updated = f" · Actualizado: {info.last_fetched:%H:%M:%S}" if info.last_fetched else ""
        st.caption(f"1 USD = {info.rate:.2f} DOP{updated}")

def handle_calculate():
    controller = st.session_state.controller
    try:
        with st.spinner("Calculando..."):
            controller.calculate()
    except AduanaError as e:
        st.error(getattr(e, "message", str(e)))
    except Exception as e:
        log_system_error("Calculation", str(e))
        st.error("Ocurrió un error durante el cálculo.")

def main():
    initialize_logging()

    try:
        initialize_session_state()
    except ConfigurationError as e:
        log_system_error("Configuration", str(e))
        st.error(f"Configuración incompleta: {e}")
        st.stop()

    controller = st.session_state.controller
    form = controller.form

    render_header()
    st.divider()

    st.subheader("Introduce los Datos del Vehículo")
    render_vehicle_selectors()

    costo_flete = st.text_input(
        "🚛 Costo de Flete (USD)",
        placeholder="Ej: 800.00",
        key="costo_flete",
        disabled=form.calculation_done
    )
    form.set_costo_flete(costo_flete)
    if costo_flete and not validate_amount(costo_flete):
        st.warning("El costo de flete debe ser un número positivo.")

    if form.selection.is_complete() and form.valor_referencia is None:
        st.info("No se encontró un valor de referencia exacto para este vehículo.")

    if form.calculation_done:
        if st.button("Nueva Búsqueda", type="primary", use_container_width=True):
            reset_search()
            st.rerun()
    else:
        if st.button("Calcular Impuestos", type="primary", use_container_width=True):
            handle_calculate()
            if form.calculation_done:
                st.rerun()

    result = form.resultados
    if result is not None:
        st.divider()
        render_drcafta_panel(result.es_dr_cafta, result.valor_fob.usd, result.exchange_rate_used)
        render_calculation_results(result, controller.rate_service.get_rate_info())
        logger.debug(f"Rendered results for {form.selection.as_dict()}")

    st.divider()
    render_disclaimer()
    st.caption(f"© {date.today().year} Calculadora de Impuestos Aduanales RD. Valores referenciales.")

if __name__ == "__main__":
    main()
