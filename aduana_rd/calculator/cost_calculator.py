"""
Import cost calculation for vehicles entering the Dominican Republic.

The pipeline is five fixed steps over scalar inputs:
FOB value, DR-CAFTA determination, customs tax, first plate + marbete, total.
All functions are pure and never raise on bad input.
"""
import math
from datetime import date
from typing import Any, Optional
from loguru import logger

from aduana_rd.models.import_models import CostBreakdown, MoneyAmount
from aduana_rd.utils.formatters import to_number, is_number
from aduana_rd.calculator.tariff_rules import (
    DR_CAFTA_COUNTRIES,
    FOB_INSURANCE_PERCENTAGE,
    DR_CAFTA_TAX_RATE,
    NON_DR_CAFTA_TAX_RATE,
    FIRST_PLATE_TAX_RATE_GENERAL,
    MARBETE_UNDER_5_YEARS,
    MARBETE_5_YEARS_OR_OLDER,
    MARBETE_AGE_THRESHOLD,
    MIN_MANUFACTURE_YEAR,
)

INVALID_INPUT_ERROR = "Invalid input data"

def is_dr_cafta_eligible(country: Any) -> bool:
    """Exact, case-insensitive match against the DR-CAFTA country list."""
    if not country or not isinstance(country, str):
        return False
    return country.upper() in DR_CAFTA_COUNTRIES

def compute_fob(reference_value: Any, freight: Any) -> float:
    """Reference value plus 2% insurance plus freight, in USD. 0 on invalid input."""
    value = to_number(reference_value)
    flete = to_number(freight)

    if not is_number(value) or not is_number(flete) or value < 0 or flete < 0:
        return 0
    return value + value * FOB_INSURANCE_PERCENTAGE + flete

def compute_tax(fob: Any, is_dr_cafta: bool) -> float:
    if not is_number(fob) or fob < 0:
        return 0
    rate = DR_CAFTA_TAX_RATE if is_dr_cafta else NON_DR_CAFTA_TAX_RATE
    return fob * rate

def compute_first_plate_and_sticker(fob: Any, age_years: Any, rate: Any) -> float:
    """
    First plate registration plus marbete, in USD.

    Args:
        fob: FOB value in USD
        age_years: Vehicle age in whole years
        rate: DOP per USD, used to convert the marbete

    Returns:
        fob * 18% + marbete / rate, or 0 when any input is invalid
    """
    if (not is_number(fob) or fob < 0
            or not is_number(age_years) or age_years < 0
            or not is_number(rate) or rate <= 0):
        return 0

    registration_usd = fob * FIRST_PLATE_TAX_RATE_GENERAL
    marbete_dop = MARBETE_UNDER_5_YEARS if age_years < MARBETE_AGE_THRESHOLD else MARBETE_5_YEARS_OR_OLDER
    return registration_usd + marbete_dop / rate

def _parse_year(manufacture_year: Any) -> Optional[int]:
    if isinstance(manufacture_year, bool) or manufacture_year is None:
        return None
    if isinstance(manufacture_year, int):
        return manufacture_year
    if isinstance(manufacture_year, float):
        return int(manufacture_year) if math.isfinite(manufacture_year) else None
    text = str(manufacture_year).strip()
    digits = ""
    for index, char in enumerate(text):
        if char.isdigit() or (index == 0 and char in "+-"):
            digits += char
        else:
            break
    try:
        return int(digits)
    except ValueError:
        return None

def vehicle_age(manufacture_year: Any, today: Optional[date] = None) -> int:
    """Current calendar year minus manufacture year; 0 when the year is missing or unparseable."""
    if not manufacture_year:
        return 0
    year = _parse_year(manufacture_year)
    if year is None:
        return 0
    today = today or date.today()
    return today.year - year

def compute_total(reference_value: Any, freight: Any, country: Any, manufacture_year: Any,
                  rate: Any, today: Optional[date] = None) -> CostBreakdown:
    """
    Run the full calculation and return an itemized breakdown.

    Invalid inputs yield CostBreakdown.zero(error=...) instead of an exception;
    callers must check `is_error`. The total covers taxes and fees only, not FOB.
    """
    value = to_number(reference_value)
    flete = to_number(freight)
    year = _parse_year(manufacture_year)

    if (not is_number(value) or value < 0
            or not is_number(flete) or flete < 0
            or not country
            or year is None or year <= MIN_MANUFACTURE_YEAR
            or not is_number(rate) or rate <= 0):
        logger.error(
            f"Invalid input for compute_total: reference_value={reference_value!r}, freight={freight!r}, "
            f"country={country!r}, manufacture_year={manufacture_year!r}, rate={rate!r}"
        )
        return CostBreakdown.zero(error=INVALID_INPUT_ERROR)

    es_dr_cafta = is_dr_cafta_eligible(country)
    antiguedad = vehicle_age(year, today)

    fob_usd = compute_fob(value, flete)
    tax_usd = compute_tax(fob_usd, es_dr_cafta)
    first_plate_usd = compute_first_plate_and_sticker(fob_usd, antiguedad, rate)
    total_usd = tax_usd + first_plate_usd

    return CostBreakdown(
        valor_fob=MoneyAmount.from_usd(fob_usd, rate),
        impuestos=MoneyAmount.from_usd(tax_usd, rate),
        primera_placa=MoneyAmount.from_usd(first_plate_usd, rate),
        total=MoneyAmount.from_usd(total_usd, rate),
        es_dr_cafta=es_dr_cafta,
        exchange_rate_used=rate,
        antiguedad=antiguedad
    )

def tax_difference(fob: float) -> float:
    """Potential saving between the general and DR-CAFTA tax on the same FOB."""
    return abs(compute_tax(fob, False) - compute_tax(fob, True))
