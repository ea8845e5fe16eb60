"""
Data models for the vehicle import cost calculator.
"""
from dataclasses import dataclass, field, replace
from typing import List, Optional, Dict, Any
from datetime import datetime

SELECTION_FIELDS = ("marca", "modelo", "especificacion", "ano", "pais")

@dataclass(frozen=True)
class VehicleSelection:
    """Model for the five chained vehicle selections."""
    marca: str = ""
    modelo: str = ""
    especificacion: str = ""
    ano: str = ""
    pais: str = ""

    def is_complete(self) -> bool:
        return all(getattr(self, name) for name in SELECTION_FIELDS)

    def with_field(self, name: str, value: Any) -> 'VehicleSelection':
        """Return a copy with `name` set and every field to its right cleared."""
        index = SELECTION_FIELDS.index(name)
        changes = {name: "" if value is None else str(value)}
        for dependent in SELECTION_FIELDS[index + 1:]:
            changes[dependent] = ""
        return replace(self, **changes)

    def as_dict(self) -> Dict[str, str]:
        return {name: getattr(self, name) for name in SELECTION_FIELDS}

@dataclass(frozen=True)
class MoneyAmount:
    """An amount expressed in both USD and DOP."""
    usd: float = 0.0
    dop: float = 0.0

    @classmethod
    def from_usd(cls, usd: float, rate: float) -> 'MoneyAmount':
        return cls(usd=usd, dop=usd * rate)

@dataclass(frozen=True)
class CostBreakdown:
    """Model for an itemized import cost result."""
    valor_fob: MoneyAmount
    impuestos: MoneyAmount
    primera_placa: MoneyAmount
    total: MoneyAmount
    es_dr_cafta: bool = False
    exchange_rate_used: float = 0.0
    antiguedad: int = 0
    error: Optional[str] = None
    # Detail fields only provided by calcular_costos_por_vehiculo
    valor_referencia: Optional[MoneyAmount] = None
    seguro: Optional[MoneyAmount] = None
    flete: Optional[MoneyAmount] = None
    marbete: Optional[MoneyAmount] = None
    porcentaje_impuesto: Optional[float] = None
    porcentaje_primera_placa: Optional[float] = None
    cc_vehiculo: Optional[Any] = None

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @classmethod
    def zero(cls, error: Optional[str] = None) -> 'CostBreakdown':
        """All-zero breakdown, tagged with `error` when validation failed."""
        return cls(
            valor_fob=MoneyAmount(),
            impuestos=MoneyAmount(),
            primera_placa=MoneyAmount(),
            total=MoneyAmount(),
            error=error
        )

    @classmethod
    def from_rpc_row(cls, row: Dict[str, Any]) -> 'CostBreakdown':
        """Create CostBreakdown from a calcular_costos_por_vehiculo row."""
        def amount(prefix: str) -> MoneyAmount:
            return MoneyAmount(
                usd=float(row.get(f"{prefix}_usd") or 0),
                dop=float(row.get(f"{prefix}_dop") or 0)
            )

        def optional_amount(prefix: str) -> Optional[MoneyAmount]:
            if row.get(f"{prefix}_usd") is None and row.get(f"{prefix}_dop") is None:
                return None
            return amount(prefix)

        return cls(
            valor_fob=amount("valor_fob"),
            impuestos=amount("impuestos"),
            primera_placa=amount("primera_placa"),
            total=amount("total"),
            es_dr_cafta=bool(row.get("es_dr_cafta_bool")),
            exchange_rate_used=float(row.get("tasa_cambio_utilizada") or 0),
            valor_referencia=optional_amount("valor_referencia"),
            seguro=optional_amount("seguro"),
            flete=optional_amount("flete"),
            marbete=optional_amount("marbete"),
            porcentaje_impuesto=row.get("porcentaje_impuesto"),
            porcentaje_primera_placa=row.get("porcentaje_primera_placa"),
            cc_vehiculo=row.get("cc_vehiculo")
        )

    def line_items(self) -> List[Dict[str, Any]]:
        """Breakdown rows in display order, skipping detail fields that are absent."""
        labels = [
            ("valor_referencia", "Valor de Referencia"),
            ("seguro", "Seguro"),
            ("flete", "Flete"),
            ("valor_fob", "Valor FOB"),
            ("impuestos", "Impuestos Aduanales"),
            ("marbete", "Marbete"),
            ("primera_placa", "Primera Placa y Marbete"),
            ("total", "Total Estimado"),
        ]
        rows = []
        for attr, label in labels:
            value = getattr(self, attr)
            if value is None:
                continue
            rows.append({"Concepto": label, "USD": round(value.usd, 2), "DOP": round(value.dop, 2)})
        return rows

@dataclass
class DropdownSeed:
    """Model for the initial dropdown option lists."""
    marcas: List[str] = field(default_factory=list)
    anos: List[Any] = field(default_factory=list)
    paises: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'DropdownSeed':
        data = data or {}
        return cls(
            marcas=data.get('marcas') or [],
            anos=data.get('anos') or [],
            paises=data.get('paises') or []
        )

@dataclass
class RateInfo:
    """Model describing the currently cached exchange rate."""
    rate: Optional[float]
    last_fetched: Optional[datetime]
    source: Optional[str] = None
    is_fallback: bool = False

    def minutes_since_fetch(self, now: datetime) -> Optional[int]:
        if self.last_fetched is None:
            return None
        return round((now - self.last_fetched).total_seconds() / 60)

