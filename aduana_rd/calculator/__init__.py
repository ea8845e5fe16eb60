"""Calculator module."""
from .cost_calculator import (
    is_dr_cafta_eligible,
    compute_fob,
    compute_tax,
    compute_first_plate_and_sticker,
    vehicle_age,
    compute_total
)
from .form_state import VehicleForm, CalculatorController

__all__ = [
    'is_dr_cafta_eligible',
    'compute_fob',
    'compute_tax',
    'compute_first_plate_and_sticker',
    'vehicle_age',
    'compute_total',
    'VehicleForm',
    'CalculatorController'
]
