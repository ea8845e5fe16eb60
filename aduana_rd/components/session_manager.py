import streamlit as st
from loguru import logger

from aduana_rd.calculator.form_state import CalculatorController
from aduana_rd.config.settings import Config
from aduana_rd.models.import_models import DropdownSeed
from aduana_rd.services.cache_service import RateCache
from aduana_rd.services.exchange_rate_service import ExchangeRateService
from aduana_rd.services.vehicle_gateway import VehicleGateway
from aduana_rd.utils.logging_utils import log_system_success

@st.cache_resource
def get_rate_service():
    """Process-wide exchange rate service, warmed once at startup"""
    service = ExchangeRateService(cache=RateCache())
    service.warm_up()
    return service

@st.cache_resource
def get_gateway():
    """Process-wide vehicle gateway"""
    gateway = VehicleGateway()
    log_system_success("Supabase", "Client initialized")
    return gateway

@st.cache_data(ttl=Config.DROPDOWN_CACHE_SECONDS, show_spinner="Cargando datos iniciales...")
def load_dropdown_seed():
    seed = get_gateway().fetch_initial_dropdown_data()
    if not seed.marcas:
        # Failed loads are not cached
        raise RuntimeError("Empty dropdown seed")
    return seed

def initialize_session_state():
    """Initialize all session state variables"""
    if 'controller' not in st.session_state:
        try:
            seed = load_dropdown_seed()
        except RuntimeError:
            logger.warning("Dropdown seed unavailable, the controller will retry on demand")
            seed = DropdownSeed()
        st.session_state.controller = CalculatorController(get_gateway(), get_rate_service(), seed=seed)
        logger.info("New calculator session")

    if 'show_in_dop' not in st.session_state:
        st.session_state.show_in_dop = False

def reset_search():
    """Reset the form and every selector widget"""
    st.session_state.controller.new_search()
    for key in list(st.session_state.keys()):
        if key.startswith("sel_") or key == "costo_flete":
            del st.session_state[key]
    st.session_state.show_in_dop = False
