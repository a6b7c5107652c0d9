"""
simulation/constants.py

Numeric parameters of the simplified DC engine and its sanity checks.
"""

# Resistance used when a resistor's value is empty, unparseable or non-positive (ohms)
DEFAULT_RESISTANCE = 1000.0

# Ideal threshold diode model: conduction starts above the forward voltage,
# then current rises through a fixed series resistance.
DIODE_FORWARD_VOLTAGE = 0.7
DIODE_SERIES_RESISTANCE = 100.0

# Nominal current reported for every voltage source, independent of load (amps)
SOURCE_PLACEHOLDER_CURRENT = 0.1

# Currents at or below this magnitude are left out of the result (amps)
CURRENT_EPSILON = 1e-10

# Warning thresholds
HIGH_VOLTAGE_THRESHOLD = 1000.0
HIGH_CURRENT_THRESHOLD = 100.0
