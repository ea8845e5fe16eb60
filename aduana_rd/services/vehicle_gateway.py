"""
Gateway to the vehicle reference database's remote procedures (Supabase RPC).

Every lookup degrades to an empty list or None; nothing here raises to the UI.
"""
from typing import Any, Dict, List, Optional

from loguru import logger
from postgrest.exceptions import APIError
from supabase import create_client, Client

from aduana_rd.config.settings import Config
from aduana_rd.exceptions import ConfigurationError
from aduana_rd.models.import_models import CostBreakdown, DropdownSeed, VehicleSelection
from aduana_rd.utils.logging_utils import log_rpc_call

# PostgREST: "JSON object requested, multiple (or no) rows returned"
NOT_FOUND_OR_AMBIGUOUS = "PGRST116"

RPC_DROPDOWN_DATA = "obtener_dropdown_data"
RPC_MODELOS = "obtener_modelos_por_marca"
RPC_ESPECIFICACIONES = "obtener_especificaciones"
RPC_PAISES_FILTRADOS = "obtener_paises_filtrados"
RPC_VEHICULO_EXACTO = "obtener_vehiculo_exacto"
RPC_CALCULAR_COSTOS = "calcular_costos_por_vehiculo"

def build_supabase_client() -> Client:
    """Create the Supabase client from Config; raise ConfigurationError if settings are missing."""
    missing = Config.validate()
    if missing:
        raise ConfigurationError(f"Supabase settings missing: {', '.join(missing)}. Check your .env file.")
    return create_client(Config.SUPABASE_URL, Config.SUPABASE_ANON_KEY)

class VehicleGateway:
    """Translate form state into RPC calls against the vehicle reference database."""

    def __init__(self, client: Client = None, uppercase_especificacion: bool = None):
        """
        Initialize the gateway.

        Args:
            client: Supabase client; built from Config when omitted
            uppercase_especificacion: Uppercase especificacion before exact lookups.
                Defaults to Config.UPPERCASE_ESPECIFICACION.
        """
        self.client = client if client is not None else build_supabase_client()
        if uppercase_especificacion is None:
            uppercase_especificacion = Config.UPPERCASE_ESPECIFICACION
        self.uppercase_especificacion = uppercase_especificacion

    def _normalize_especificacion(self, especificacion: str) -> str:
        # Whether the store matches this column case-sensitively is not settled with the data provider
        return especificacion.upper() if self.uppercase_especificacion else especificacion

    def _base_params(self, marca: str, modelo: str, especificacion: str, ano: Any) -> Dict[str, Any]:
        return {
            'p_marca': marca.upper(),
            'p_modelo': modelo.upper(),
            'p_especificacion': self._normalize_especificacion(especificacion),
            'p_ano': int(ano),
        }

    def _call_list(self, rpc_name: str, params: Dict[str, Any] = None) -> Optional[Any]:
        """Invoke a list-returning RPC; None on any failure."""
        log_rpc_call(rpc_name, params or {})
        try:
            response = self.client.rpc(rpc_name, params or {}).execute()
        except APIError as e:
            logger.error(f"[Supabase] Error in '{rpc_name}': code={e.code} message={e.message} params={params}")
            return None
        except Exception as e:
            logger.error(f"[Supabase] Unhandled exception in '{rpc_name}' params={params}: {str(e)}")
            return None

        if response.data is None:
            logger.warning(f"[Supabase] No data returned by '{rpc_name}', but no explicit error. Params: {params}")
            return None
        return response.data

    def _call_single(self, rpc_name: str, params: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Invoke an RPC expected to return exactly one row; None when not found, ambiguous or failed."""
        log_rpc_call(rpc_name, params)
        try:
            response = self.client.rpc(rpc_name, params).single().execute()
        except APIError as e:
            if e.code == NOT_FOUND_OR_AMBIGUOUS:
                logger.warning(f"[Supabase] No exact row or multiple rows from '{rpc_name}'. Params: {params}")
                return None
            logger.error(f"[Supabase] Error in '{rpc_name}': code={e.code} message={e.message} params={params}")
            return None
        except Exception as e:
            logger.error(f"[Supabase] Unhandled exception in '{rpc_name}' params={params}: {str(e)}")
            return None

        if not response.data:
            logger.warning(f"[Supabase] No data object returned by '{rpc_name}', but no explicit error. Params: {params}")
            return None
        return response.data

    def fetch_initial_dropdown_data(self) -> DropdownSeed:
        """Seed lists for marca, ano and pais."""
        data = self._call_list(RPC_DROPDOWN_DATA)
        if not isinstance(data, dict):
            return DropdownSeed()
        seed = DropdownSeed.from_dict(data)
        logger.info(f"[Supabase] Dropdown seed: {len(seed.marcas)} marcas, {len(seed.anos)} anos, {len(seed.paises)} paises")
        return seed

    def get_modelos_by_marca(self, marca: str) -> List[str]:
        if not marca:
            return []
        data = self._call_list(RPC_MODELOS, {'marca_param': marca})
        return list(data) if data else []

    def get_especificaciones(self, marca: str, modelo: str) -> List[str]:
        if not marca or not modelo:
            return []
        data = self._call_list(RPC_ESPECIFICACIONES, {'marca_param': marca, 'modelo_param': modelo})
        return list(data) if data else []

    def fetch_filtered_paises(self, marca: str, modelo: str, especificacion: str, ano: Any) -> List[Dict[str, Any]]:
        """Countries available for the partial selection, as [{"pais": ...}] records."""
        if not marca or not modelo or not especificacion or not ano:
            return []
        try:
            params = self._base_params(marca, modelo, especificacion, ano)
        except (TypeError, ValueError) as e:
            logger.warning(f"[Supabase] Invalid year for filtered paises: {ano!r} ({str(e)})")
            return []
        data = self._call_list(RPC_PAISES_FILTRADOS, params)
        return list(data) if data else []

    def get_valor_referencia(self, selection: VehicleSelection) -> Optional[float]:
        """Reference value for one exact vehicle; None when not found or ambiguous."""
        if not selection.is_complete():
            return None
        try:
            params = self._base_params(selection.marca, selection.modelo, selection.especificacion, selection.ano)
        except (TypeError, ValueError) as e:
            logger.warning(f"[Supabase] Invalid year for valor de referencia: {selection.ano!r} ({str(e)})")
            return None
        params['p_pais'] = selection.pais.upper()

        row = self._call_single(RPC_VEHICULO_EXACTO, params)
        if not isinstance(row, dict) or row.get('valor') is None:
            return None
        try:
            return float(row['valor'])
        except (TypeError, ValueError) as e:
            logger.error(f"[Supabase] Non-numeric valor from '{RPC_VEHICULO_EXACTO}': {row.get('valor')!r} params={params} ({str(e)})")
            return None

    def calculate_import_costs(self, selection: VehicleSelection, costo_flete: Any) -> Optional[CostBreakdown]:
        """Server-side cost computation for one exact vehicle; None when not found or failed."""
        if not selection.is_complete() or costo_flete is None:
            logger.warning("[Supabase] Missing parameters for calculate_import_costs")
            return None
        try:
            params = self._base_params(selection.marca, selection.modelo, selection.especificacion, selection.ano)
            params['p_flete'] = float(costo_flete)
        except (TypeError, ValueError) as e:
            logger.warning(f"[Supabase] Invalid parameters for calculate_import_costs: {str(e)}")
            return None
        params['p_pais'] = selection.pais.upper()

        row = self._call_single(RPC_CALCULAR_COSTOS, params)
        if not isinstance(row, dict):
            return None
        logger.info(f"[Supabase] Exchange rate used by server: {row.get('tasa_cambio_utilizada')}")
        try:
            return CostBreakdown.from_rpc_row(row)
        except (TypeError, ValueError) as e:
            logger.error(f"[Supabase] Malformed row from '{RPC_CALCULAR_COSTOS}' params={params}: {str(e)}")
            return None
