#!/usr/bin/env python3
"""
Template Helpers for netdash Dashboard

Rate formatting shared by the series adapter (marker and axis labels) and
the Jinja2 page.
"""

import math
import time

from ..core.errors import NumericError

RATE_BASE = 1024
RATE_UNITS = ["b/s", "Kb/s", "Mb/s", "Gb/s", "Tb/s", "Pb/s", "Eb/s", "Zb/s", "Yb/s"]
ZERO_RATE = "0b/s"


def _normalize_exponent(text: str) -> str:
    """Rewrite Python exponent text (1.0e+03) as 1.0e+3."""
    if "e" not in text:
        return text.rstrip(".")
    mantissa, exponent = text.split("e")
    return f"{mantissa.rstrip('.')}e{int(exponent):+d}"


def _plain_number(value: float) -> str:
    """Shortest round-trip text, integral values without a fractional part."""
    if value.is_integer():
        return str(int(value))
    return _normalize_exponent(repr(value))


def _significant(value: float, precision: int) -> str:
    """Exactly `precision` significant digits, trailing zeros kept."""
    return _normalize_exponent(format(value, f"#.{precision}g"))


def rate_exponent(value: float) -> int:
    """Index into RATE_UNITS for a positive rate, clamped to the table."""
    c = math.floor(math.log(value) / math.log(RATE_BASE))
    return max(0, min(c, len(RATE_UNITS) - 1))


def format_rate(value, precision: int = -1) -> str:
    """
    Format a bits/sec rate with a base-1024 unit.

    Args:
        value: Rate in bits per second
        precision: Significant digits of the mantissa, -1 for no rounding

    Returns:
        "<mantissa> <unit>", or "0b/s" for zero and negative rates

    Raises:
        NumericError: value is NaN or infinite
    """
    value = float(value)
    if not math.isfinite(value):
        raise NumericError(f"cannot format rate {value!r}")
    if value <= 0:
        return ZERO_RATE

    c = rate_exponent(value)
    mantissa = value / RATE_BASE ** c
    if precision == -1:
        text = _plain_number(mantissa)
    else:
        text = _significant(mantissa, precision)
    return f"{text} {RATE_UNITS[c]}"


def format_time(timestamp):
    """Format timestamp as time only."""
    if not timestamp:
        return ""
    return time.strftime("%H:%M:%S", time.localtime(timestamp))


def setup_template_filters(templates):
    """Setup all template filters in Jinja2 environment."""
    templates.env.filters['format_time'] = format_time
