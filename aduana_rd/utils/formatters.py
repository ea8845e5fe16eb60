import math
import re

_NON_NUMERIC = re.compile(r"[^0-9.\-]+")
_LEADING_NUMBER = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)")

def format_usd(amount):
    """Format amount as US dollars, en-US style ($1,234.56)"""
    return _format_money(amount, "$")

def format_dop(amount):
    """Format amount as Dominican pesos, es-DO style (RD$1,234.56)"""
    return _format_money(amount, "RD$")

def _format_money(amount, symbol):
    amount = float(amount or 0)
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"

def format_percentage(rate):
    """Format a fractional rate (0.2985) as a percentage with 2 decimal places"""
    return f"{rate * 100:.2f}%"

def to_number(value):
    """
    Read a number out of user input, or None when there is none.

    Numbers pass through unchanged. Strings are stripped of everything except
    digits, '.' and '-'; extra decimal points are folded into the fraction.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if not isinstance(value, str):
        return None

    cleaned = _NON_NUMERIC.sub("", value)
    parts = cleaned.split(".")
    if len(parts) > 2:
        cleaned = parts[0] + "." + "".join(parts[1:])

    match = _LEADING_NUMBER.match(cleaned)
    if not match:
        return None
    return float(match.group(0))

def parse_number(value):
    """Permissive number parsing for user input; anything unreadable gives 0"""
    number = to_number(value)
    return 0 if number is None else number

def is_number(value):
    """True for real, finite-or-infinite, non-NaN numbers (bools excluded)"""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not math.isnan(value)

def validate_amount(amount):
    """Check that an amount parses to a non-negative number"""
    number = to_number(str(amount))
    if number is None or not is_number(number):
        return False
    return number >= 0
