"""
Form state and orchestration for the import calculator.

VehicleForm holds the five chained selections (marca -> modelo ->
especificacion -> ano -> pais) plus freight and derived results.
CalculatorController drives the dependent lookups and the calculation.
"""
from datetime import date
from typing import Any, Dict, List, Optional, Tuple
from loguru import logger

from aduana_rd.exceptions import (
    CalculationUnavailableError,
    ConfigurationError,
    MissingFieldsError,
    SelectionError,
)
from aduana_rd.models.import_models import SELECTION_FIELDS, CostBreakdown, DropdownSeed, VehicleSelection
from aduana_rd.calculator.cost_calculator import compute_total
from aduana_rd.services.exchange_rate_service import ExchangeRateService
from aduana_rd.services.vehicle_gateway import VehicleGateway
from aduana_rd.utils.formatters import parse_number, is_number
from aduana_rd.utils.logging_utils import log_calculation

class VehicleForm:
    """Selection state for one session."""

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        """Clear everything, as a fresh page load would."""
        self.selection = VehicleSelection()
        self.costo_flete = ""
        self.valor_referencia: Optional[float] = None
        self.resultados: Optional[CostBreakdown] = None
        self.calculation_done = False

    def get(self, name: str) -> str:
        return getattr(self.selection, name)

    def set_field(self, name: str, value: Any) -> None:
        """Set one selection, clearing every field to its right and any derived result."""
        if name not in SELECTION_FIELDS:
            raise SelectionError(f"Unknown field: {name}")

        value = "" if value is None else str(value)
        if value:
            prefix = SELECTION_FIELDS[:SELECTION_FIELDS.index(name)]
            missing = [field for field in prefix if not self.get(field)]
            if missing:
                raise SelectionError(f"Cannot set '{name}' before {', '.join(missing)}")

        self.selection = self.selection.with_field(name, value)
        self.valor_referencia = None
        self.resultados = None

    def clear_field(self, name: str) -> None:
        self.set_field(name, "")

    def set_costo_flete(self, value: Any) -> None:
        self.costo_flete = "" if value is None else str(value)

    def freight_value(self) -> float:
        return parse_number(self.costo_flete)

    def missing_fields(self) -> List[str]:
        missing = [name for name in SELECTION_FIELDS if not self.get(name)]
        freight = self.freight_value()
        if not self.costo_flete or not is_number(freight) or freight <= 0:
            missing.append("costo_flete")
        return missing

    def can_calculate(self) -> bool:
        return not self.missing_fields()

class CalculatorController:
    """Coordinates the form, the vehicle gateway and the exchange rate service."""

    def __init__(self, gateway: VehicleGateway, rate_service: ExchangeRateService,
                 form: VehicleForm = None, today: date = None, seed: DropdownSeed = None):
        """
        Initialize the controller.

        Args:
            gateway: Remote data gateway
            rate_service: Exchange rate provider used to price the calculation
            form: Existing form state to drive
            today: Fixed date for vehicle age, mainly for tests
            seed: Preloaded dropdown seed; fetched from the gateway when omitted or empty
        """
        if rate_service is None:
            raise ConfigurationError("The calculator needs an exchange rate service")

        self.gateway = gateway
        self.rate_service = rate_service
        self.form = form or VehicleForm()
        self.today = today
        self._seed: Optional[DropdownSeed] = seed
        self._options: Dict[Tuple, List[str]] = {}

    @property
    def seed(self) -> DropdownSeed:
        if self._seed is None or not self._seed.marcas:
            self._seed = self.gateway.fetch_initial_dropdown_data()
        return self._seed

    def options_for(self, name: str) -> List[str]:
        """Valid options for a field given the fields before it; empty while its prefix is incomplete."""
        sel = self.form.selection
        if name == "marca":
            return list(self.seed.marcas)
        if name == "modelo":
            if not sel.marca:
                return []
            return self._memo(("modelo", sel.marca), lambda: self.gateway.get_modelos_by_marca(sel.marca))
        if name == "especificacion":
            if not sel.marca or not sel.modelo:
                return []
            return self._memo(("especificacion", sel.marca, sel.modelo),
                              lambda: self.gateway.get_especificaciones(sel.marca, sel.modelo))
        if name == "ano":
            if not sel.especificacion:
                return []
            return [str(ano) for ano in self.seed.anos]
        if name == "pais":
            if not sel.ano:
                return []
            key = ("pais", sel.marca, sel.modelo, sel.especificacion, sel.ano)
            return self._memo(key, lambda: [
                row.get("pais") for row in self.gateway.fetch_filtered_paises(
                    sel.marca, sel.modelo, sel.especificacion, sel.ano)
                if isinstance(row, dict) and row.get("pais")
            ])
        raise SelectionError(f"Unknown field: {name}")

    def _memo(self, key: Tuple, loader) -> List[str]:
        # Empty results are not kept so a transient failure can be retried
        if key not in self._options:
            options = loader()
            if not options:
                return []
            self._options[key] = options
        return list(self._options[key])

    def select(self, name: str, value: Any) -> Optional[float]:
        """Set a field; once all five are set, look up the reference value."""
        self.form.set_field(name, value)
        if self.form.selection.is_complete():
            return self.refresh_valor_referencia()
        return None

    def refresh_valor_referencia(self) -> Optional[float]:
        """Fetch the reference value for the current selection. The latest completed lookup wins."""
        selection = self.form.selection
        valor = self.gateway.get_valor_referencia(selection)
        self.form.valor_referencia = valor
        if valor is None:
            logger.info(f"No reference value for {selection.as_dict()}")
        return valor

    def calculate(self) -> CostBreakdown:
        """
        Compute the cost breakdown for the current form.

        Raises:
            MissingFieldsError: a vehicle field or a positive freight value is missing
            CalculationUnavailableError: no reference value, or the inputs did not validate
        """
        missing = self.form.missing_fields()
        if missing:
            logger.info(f"Calculation rejected, missing fields: {missing}")
            raise MissingFieldsError()

        self.form.resultados = None
        breakdown = self._price_selection()

        self.form.resultados = breakdown
        self.form.calculation_done = True
        log_calculation(self.form.selection.marca, self.form.selection.modelo,
                        breakdown.total.usd, breakdown.es_dr_cafta)
        return breakdown

    def _price_selection(self) -> CostBreakdown:
        selection = self.form.selection
        valor = self.form.valor_referencia
        if valor is None:
            valor = self.refresh_valor_referencia()
        if valor is None:
            raise CalculationUnavailableError()

        rate = self.rate_service.get_rate()
        breakdown = compute_total(valor, self.form.freight_value(), selection.pais, selection.ano, rate, self.today)
        if breakdown.is_error:
            raise CalculationUnavailableError()
        return breakdown

    def new_search(self) -> None:
        """Reset all state unconditionally."""
        self.form.reset()
        logger.info("New search started")
