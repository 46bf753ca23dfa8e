"""Extraction and SI-prefix formatting of alert query values."""

import logging
import math

from alertslack.errors import HumanizeError

logger = logging.getLogger(__name__)

_LARGE_PREFIXES = ("k", "M", "G", "T", "P", "E", "Z", "Y")
_SMALL_PREFIXES = ("m", "µ", "n", "p", "f", "a", "z", "y")


def _format4(value: float) -> str:
    """Four significant digits, spelling special values the way Grafana does."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    return f"{value:.4g}"


def humanize(text: str) -> str:
    """Format a numeric string with an SI prefix.

    >>> humanize("1500")
    '1.5k'
    >>> humanize("0.0025")
    '2.5m'

    Raises:
        HumanizeError: text is not a number.
    """
    try:
        value = float(text)
    except (TypeError, ValueError) as e:
        raise HumanizeError(f"cannot parse {text!r} as a number") from e

    if value == 0 or math.isnan(value) or math.isinf(value):
        return _format4(value)

    prefix = ""
    if abs(value) >= 1:
        for p in _LARGE_PREFIXES:
            if abs(value) < 1000:
                break
            prefix = p
            value /= 1000
    else:
        for p in _SMALL_PREFIXES:
            if abs(value) >= 1:
                break
            prefix = p
            value *= 1000
    return f"{_format4(value)}{prefix}"


def extract_value(value_string: str) -> str:
    """Pull the number out of a Grafana valueString and humanize it.

    The expected shape is ``[ var='B' labels={...} value=123 ]``. Anything
    else is returned unchanged; an unparseable number is returned raw.
    """
    parts = value_string.split("value=")
    if len(parts) != 2:
        logger.warning(f"Cannot split value by 'value=': {value_string}")
        return value_string

    raw = parts[1].split(" ")[0]
    try:
        return humanize(raw)
    except HumanizeError as e:
        logger.warning(f"Cannot humanize value: {e}")
        return raw
