import pytest
from loguru import logger

from aduana_rd.models.import_models import VehicleSelection
from tests.fakes import FakeSupabaseClient


@pytest.fixture
def complete_selection():
    return VehicleSelection(
        marca="toyota",
        modelo="corolla",
        especificacion="Le 1.8L",
        ano="2023",
        pais="estados unidos",
    )


@pytest.fixture
def catalog_client():
    """A small vehicle catalog served through the fake RPCs."""
    return FakeSupabaseClient({
        "obtener_dropdown_data": {
            "marcas": ["toyota", "honda"],
            "anos": [2024, 2023, 2020],
            "paises": ["ESTADOS UNIDOS", "JAPON"],
        },
        "obtener_modelos_por_marca": lambda p: {"toyota": ["corolla", "rav4"], "honda": ["civic"]}.get(p["marca_param"], []),
        "obtener_especificaciones": lambda p: ["Le 1.8L", "Xse 2.0L"] if p["modelo_param"] == "corolla" else [],
        "obtener_paises_filtrados": [{"pais": "ESTADOS UNIDOS"}, {"pais": "JAPON"}],
        "obtener_vehiculo_exacto": {"valor": 20000},
        "calcular_costos_por_vehiculo": {
            "valor_fob_usd": 21200, "valor_fob_dop": 1240200,
            "impuestos_usd": 3816, "impuestos_dop": 223236,
            "primera_placa_usd": 3867.28, "primera_placa_dop": 226235.88,
            "total_usd": 7683.28, "total_dop": 449471.88,
            "tasa_cambio_utilizada": 58.5,
            "es_dr_cafta_bool": True,
            "marbete_usd": 51.28, "marbete_dop": 3000,
            "porcentaje_impuesto": 0.18,
        },
    })


@pytest.fixture
def log_records():
    """Loguru records emitted during the test, as (level name, message) pairs."""
    records = []
    handler_id = logger.add(lambda message: records.append((message.record["level"].name, message.record["message"])),
                            level="DEBUG")
    yield records
    logger.remove(handler_id)
