"""
Utility functions for rounding and displaying monetary amounts.
"""

import decimal
from decimal import Decimal
from typing import Optional

from app.config.settings import OrderViewConfigs

from app.logging.utils import get_app_logger
logger = get_app_logger('price_format')

configs = OrderViewConfigs()

ROUNDING_MODES = {
    name: getattr(decimal, name)
    for name in (
        "ROUND_HALF_UP",
        "ROUND_HALF_DOWN",
        "ROUND_HALF_EVEN",
        "ROUND_UP",
        "ROUND_DOWN",
        "ROUND_CEILING",
        "ROUND_FLOOR",
        "ROUND_05UP",
    )
}


def get_rounding_mode(name: Optional[str] = None) -> str:
    """
    Resolve a rounding mode name to the decimal module constant.

    Args:
        name: Rounding mode name such as "ROUND_HALF_UP"; defaults to PRICE_ROUNDING_MODE

    Returns:
        The decimal rounding constant
    """
    mode = (name or configs.PRICE_ROUNDING_MODE).upper()
    if mode not in ROUNDING_MODES:
        logger.error(f"Invalid rounding mode: {mode}. Valid modes: {sorted(ROUNDING_MODES)}")
        raise ValueError(f"Invalid rounding mode {mode}. Valid modes: {sorted(ROUNDING_MODES)}")
    return ROUNDING_MODES[mode]


def round_price(amount, precision: Optional[int] = None, rounding: Optional[str] = None) -> Decimal:
    """
    Round an exact amount to the display precision.

    Args:
        amount: Decimal, int or decimal string
        precision: Number of decimal places; defaults to PRICE_DISPLAY_PRECISION
        rounding: Rounding mode name; defaults to PRICE_ROUNDING_MODE

    Returns:
        Rounded Decimal

    Raises:
        TypeError: If amount is a float
        ValueError: If amount is not a number or does not fit the display precision
    """
    if isinstance(amount, (float, bool)):
        logger.error(f"Refusing to round inexact amount: {amount!r}")
        raise TypeError(f"amount must be an exact decimal, got {type(amount).__name__}")

    places = configs.PRICE_DISPLAY_PRECISION if precision is None else precision
    if places < 0:
        raise ValueError("precision must not be negative")
    mode = get_rounding_mode(rounding)
    exponent = Decimal(1).scaleb(-places)
    try:
        return Decimal(amount).quantize(exponent, rounding=mode)
    except decimal.InvalidOperation as e:
        logger.error(f"price_round_error | amount={amount!r} precision={places} error={e!r}")
        raise ValueError(f"Cannot round {amount!r} to {places} decimal places") from e


def format_price(amount, currency_symbol: Optional[str] = None, precision: Optional[int] = None, rounding: Optional[str] = None) -> str:
    """
    Format an exact amount for display, e.g. Decimal("1234.5") -> "$1,234.50".

    The returned text is presentation-only and is never parsed back.
    """
    places = configs.PRICE_DISPLAY_PRECISION if precision is None else precision
    symbol = configs.CURRENCY_SYMBOL if currency_symbol is None else currency_symbol
    rounded = round_price(amount, places, rounding)
    sign = "-" if rounded < 0 else ""
    return f"{sign}{symbol}{abs(rounded):,.{places}f}"
