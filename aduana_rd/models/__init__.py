"""Models module."""
from .import_models import VehicleSelection, MoneyAmount, CostBreakdown, DropdownSeed, RateInfo

__all__ = ['VehicleSelection', 'MoneyAmount', 'CostBreakdown', 'DropdownSeed', 'RateInfo']
