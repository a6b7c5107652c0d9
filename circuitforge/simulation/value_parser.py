"""
simulation/value_parser.py

Parsing and formatting of component magnitudes with SI unit prefixes.
"""

import re

# Prefix table, longest candidates first so "meg" wins over "m".
# Matching is case-insensitive, which makes "M" milli as in SPICE.
PREFIX_MULTIPLIERS = [
    ("meg", 1e6),
    ("p", 1e-12),
    ("n", 1e-9),
    ("µ", 1e-6),  # micro sign
    ("μ", 1e-6),  # greek mu
    ("u", 1e-6),
    ("m", 1e-3),
    ("k", 1e3),
    ("g", 1e9),
]

# Leading decimal numeral, optional whitespace, optional unit letters, nothing else
_VALUE_RE = re.compile(r"^(\d+(?:\.\d*)?|\.\d+)\s*([a-zA-ZµμΩω]+)?$")

FORMATTING_PREFIXES = [
    (1e9, "G"),
    (1e6, "M"),
    (1e3, "k"),
    (1, ""),
    (1e-3, "m"),
    (1e-6, "µ"),
    (1e-9, "n"),
    (1e-12, "p"),
]


def parse_value(value) -> float:
    """
    Parse a magnitude string with an optional SI prefix into a float.

    Examples: "220Ω" -> 220.0, "1kΩ" -> 1000.0, "10µF" -> 1e-5, "2meg" -> 2e6.
    Empty or unparseable input yields 0.0; this never raises.
    """
    if value is None:
        return 0.0
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    if not isinstance(value, str):
        return 0.0

    match = _VALUE_RE.match(value.strip())
    if not match:
        return 0.0

    num_str, unit_str = match.groups()
    number = float(num_str)
    unit = (unit_str or "").lower()

    for prefix, multiplier in PREFIX_MULTIPLIERS:
        if unit.startswith(prefix):
            return number * multiplier

    return number


def format_value(value: float, unit: str = "") -> str:
    """
    Format a float with the most appropriate SI prefix.

    Examples: 0.015 -> "15.00 m", 15000 -> "15 k"
    """
    if value == 0:
        return f"0 {unit}".rstrip()

    abs_val = abs(value)
    for mult, prefix in FORMATTING_PREFIXES:
        if abs_val >= mult:
            scaled = value / mult
            if scaled == int(scaled):
                return f"{int(scaled)} {prefix}{unit}".rstrip()
            return f"{scaled:.2f} {prefix}{unit}".rstrip()

    # Smaller than the smallest prefix
    return f"{value:.2e} {unit}".rstrip()
