"""Utils module."""
from .formatters import format_usd, format_dop, format_percentage, parse_number, validate_amount
from .logging_utils import setup_logger, log_system_startup, log_system_error

__all__ = [
    'format_usd',
    'format_dop',
    'format_percentage',
    'parse_number',
    'validate_amount',
    'setup_logger',
    'log_system_startup',
    'log_system_error'
]
