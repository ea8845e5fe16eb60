"""Services module."""
from .cache_service import RateCache
from .exchange_rate_service import ExchangeRateService
from .vehicle_gateway import VehicleGateway

__all__ = ['RateCache', 'ExchangeRateService', 'VehicleGateway']
